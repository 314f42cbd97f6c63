"""
Identity store. All functions take the request's Session; callers own the transaction
except where a function says it commits.
"""
import logging

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shortreel.config import get_settings
from shortreel.exceptions import ConflictError, InsufficientFundsError
from shortreel.models.user import User

logger = logging.getLogger(__name__)


def register(db: Session, username: str, email: str, password_hash: str) -> User:
    """Create a user with the starting wallet. Commits. Duplicate email or username -> ConflictError."""
    exists = db.query(User).filter(or_(User.email == email, User.username == username)).first()
    if exists:
        raise ConflictError("User already exists")
    user = User(
        username=username,
        email=email,
        password_hash=password_hash,
        wallet=get_settings().starting_wallet,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def find_by_credential_match(db: Session, identifier: str) -> User | None:
    """Exact match on email or username."""
    return db.query(User).filter(or_(User.email == identifier, User.username == identifier)).first()


def get_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_balance(db: Session, user_id: int) -> int:
    """Re-read the wallet so instances already loaded in this session are not stale."""
    user = db.get(User, user_id)
    db.refresh(user)
    return user.wallet


def debit(db: Session, user_id: int, amount: int) -> int:
    """
    Take `amount` from the wallet in a single conditional UPDATE, so two interleaved
    debits can never overdraw it. Does not commit. Returns the new balance.
    """
    result = db.execute(
        update(User)
        .where(User.id == user_id, User.wallet >= amount)
        .values(wallet=User.wallet - amount)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise InsufficientFundsError("Insufficient balance")
    return get_balance(db, user_id)


def credit(db: Session, user_id: int, amount: int) -> int:
    """Add `amount` to the wallet. Does not commit. Returns the new balance."""
    db.execute(
        update(User)
        .where(User.id == user_id)
        .values(wallet=User.wallet + amount)
        .execution_options(synchronize_session=False)
    )
    return get_balance(db, user_id)
