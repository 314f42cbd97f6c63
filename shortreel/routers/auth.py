from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from shortreel.database import get_db
from shortreel.exceptions import AuthError, ValidationError
from shortreel.models.user import User
from shortreel.auth import create_access_token, get_current_user, hash_password, verify_password
from shortreel.repositories import user_repository
from shortreel.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account with the starting wallet and return a token for it."""
    if not body.username or not body.email or not body.password:
        raise ValidationError("All fields are required")
    user = user_repository.register(db, body.username, body.email, hash_password(body.password))
    token = create_access_token(user.id, user.username)
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Login with email or username and password."""
    user = user_repository.find_by_credential_match(db, body.identifier.strip())
    if not user or not verify_password(body.password, user.password_hash):
        raise AuthError("Invalid credentials")
    token = create_access_token(user.id, user.username)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)
