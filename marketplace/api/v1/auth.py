from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from marketplace.core.database import get_db
from marketplace.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from marketplace.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from marketplace.services.user_service import UserService
from marketplace.utils.exceptions import UnauthorizedError

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_tokens(user_id: int) -> dict:
    subject = {"sub": str(user_id)}
    return {
        "access_token": create_access_token(subject),
        "refresh_token": create_refresh_token(subject),
        "token_type": "bearer",
    }


@router.post(
    "/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED
)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    user = UserService(db).create_user(
        email=request.email,
        full_name=request.full_name,
        password=request.password,
        phone=request.phone,
    )
    return _issue_tokens(user.id)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = UserService(db).authenticate(request.email, request.password)
    return _issue_tokens(user.id)


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(request: RefreshRequest, db: Session = Depends(get_db)):
    payload = decode_token(request.refresh_token)

    if payload.get("type") != "refresh":
        raise UnauthorizedError("Invalid token type")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid token payload")

    if not UserService(db).get_user_by_id(user_id):
        raise UnauthorizedError("User not found")

    return _issue_tokens(user_id)
