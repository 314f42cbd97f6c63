"""
Wallet-backed purchases and gifts.

Both flows debit through user_repository.debit (a conditional UPDATE), so a lost race
surfaces as InsufficientFundsError and the wallet never goes negative. Purchases are also
protected by the unique (user_id, video_id) constraint.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shortreel.config import get_settings
from shortreel.exceptions import ConflictError, InsufficientFundsError, NotFoundError, ValidationError
from shortreel.models.gift import Gift
from shortreel.models.user import User
from shortreel.repositories import user_repository, video_repository

logger = logging.getLogger(__name__)


def _require_user(db: Session, user_id: int) -> User:
    user = user_repository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def purchase_video(db: Session, user_id: int, video_id: int) -> int:
    """
    Unlock a video for a user. Check order: video, user, already purchased, balance.
    Returns the user's new balance.
    """
    video = video_repository.get_by_id(db, video_id)
    user = _require_user(db, user_id)

    if video_repository.has_purchased(db, user_id, video_id):
        logger.info("Purchase rejected: user %s already owns video %s", user_id, video_id)
        raise ConflictError("Already purchased")

    if user.wallet < video.price:
        logger.info("Purchase rejected: user %s balance %s < price %s", user_id, user.wallet, video.price)
        raise InsufficientFundsError("Insufficient balance")

    try:
        new_balance = user_repository.debit(db, user_id, video.price)
        video_repository.add_purchase(db, user_id, video_id, video.price)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Already purchased")
    except InsufficientFundsError:
        db.rollback()
        raise

    logger.info("User %s purchased video %s for %s (balance %s)", user_id, video_id, video.price, new_balance)
    return new_balance


def gift_creator(db: Session, user_id: int, video_id: int, amount: int | None) -> int:
    """
    Send `amount` from the sender's wallet to the video's creator. Returns the sender's new balance.

    The creator's wallet is only credited when GIFT_CREDITS_CREATOR is enabled.
    """
    if amount is None or amount <= 0:
        raise ValidationError("Invalid gift amount")

    video = video_repository.get_by_id(db, video_id)
    sender = _require_user(db, user_id)

    if sender.wallet < amount:
        logger.info("Gift rejected: user %s balance %s < amount %s", user_id, sender.wallet, amount)
        raise InsufficientFundsError("Insufficient balance")

    creator_id = video.creator_id
    try:
        new_balance = user_repository.debit(db, user_id, amount)
        db.add(Gift(video_id=video_id, sender_id=user_id, creator_id=creator_id, amount=amount))
        if get_settings().gift_credits_creator:
            user_repository.credit(db, creator_id, amount)
            new_balance = user_repository.get_balance(db, user_id)
        db.commit()
    except InsufficientFundsError:
        db.rollback()
        raise

    logger.info("User %s gifted %s to creator %s on video %s (balance %s)", user_id, amount, creator_id, video_id, new_balance)
    return new_balance
