from shortreel.schemas.video import CamelModel


class PurchaseRequest(CamelModel):
    video_id: int


class GiftRequest(CamelModel):
    amount: int | None = None


class BalanceResponse(CamelModel):
    message: str
    new_balance: int
