from datetime import datetime, timedelta
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from shortreel.config import get_settings
from shortreel.database import get_db
from shortreel.exceptions import AuthError
from shortreel.models.user import User
from shortreel.repositories import user_repository
from shortreel.schemas.user import TokenPayload

security = HTTPBearer(auto_error=False)

# Use Argon2 for password hashing
pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
)

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)

def create_access_token(user_id: int, username: str, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.utcnow() + expires_delta
    payload = {
        "sub": str(user_id),
        "username": username,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)

def decode_token(token: str) -> TokenPayload | None:
    """Return the payload, or None for any malformed, expired or tampered token."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
        )
        if payload.get("type") != "access":
            return None
        return TokenPayload(
            user_id=int(payload["sub"]),
            username=payload["username"],
            exp=payload["exp"],
        )
    except (JWTError, KeyError, TypeError, ValueError):
        return None

def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> TokenPayload:
    """Authenticate the request from its Bearer credential (no database lookup)."""
    if not credentials:
        raise AuthError("Unauthorized")

    payload = decode_token(credentials.credentials)

    if not payload:
        raise AuthError("Invalid or expired token")

    return payload

def get_current_user(
    payload: TokenPayload = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> User:
    user = user_repository.get_by_id(db, payload.user_id)

    if not user:
        raise AuthError("User not found")

    return user
