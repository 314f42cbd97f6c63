from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shortreel.auth import get_token_payload
from shortreel.database import get_db
from shortreel.schemas.ledger import BalanceResponse, GiftRequest, PurchaseRequest
from shortreel.schemas.user import TokenPayload
from shortreel.services import ledger

router = APIRouter(prefix="/api/videos", tags=["ledger"])


@router.post("/purchase", response_model=BalanceResponse)
def purchase_video(
    body: PurchaseRequest,
    payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    """Unlock a paid video with the caller's wallet."""
    new_balance = ledger.purchase_video(db, payload.user_id, body.video_id)
    return BalanceResponse(message="Purchase successful", new_balance=new_balance)


@router.post("/{video_id}/gift", response_model=BalanceResponse)
def gift_creator(
    video_id: int,
    body: GiftRequest,
    payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
):
    new_balance = ledger.gift_creator(db, payload.user_id, video_id, body.amount)
    return BalanceResponse(message="Gift sent successfully", new_balance=new_balance)
