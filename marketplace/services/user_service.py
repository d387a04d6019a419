from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from typing import Optional
import logging

from marketplace.core.config import settings
from marketplace.core.security import get_password_hash, verify_password
from marketplace.middleware.transaction_handler import storage_guard, transactional
from marketplace.models.order import Order
from marketplace.models.user import User
from marketplace.schemas.user import (
    ChangePasswordRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    UserStatsResponse,
)
from marketplace.utils.date_helpers import format_member_since, format_timestamp
from marketplace.utils.exceptions import (
    ConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def account_number_for(user: User) -> str:
    if user.account_number:
        return user.account_number
    return str(10000 + user.id).zfill(5)


def project_profile(user: User, total_orders: int = 0) -> ProfileResponse:
    name = user.full_name or "User"
    return ProfileResponse(
        id=user.id,
        account_number=account_number_for(user),
        name=name,
        full_name=name,
        email=user.email or "",
        phone=user.phone or "",
        address=user.address or "",
        city=user.city or "",
        gender=user.gender or "",
        avatar=user.avatar,
        wallet_balance=float(user.wallet_balance or 0),
        member_level=user.member_level or "basic",
        member_points=int(user.member_points or 0),
        total_orders=total_orders,
        verified=bool(user.verified),
        member_since=format_member_since(user.created_at),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class UserService:
    """Profile of the authenticated user"""

    def __init__(self, db: Session):
        self.db = db

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def _require_user(self, user_id: int) -> User:
        user = self.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def _order_count(self, user_id: int) -> int:
        return (
            self.db.query(func.count(Order.id)).filter(Order.user_id == user_id).scalar()
        )

    @transactional
    def create_user(
        self,
        email: str,
        full_name: str,
        password: str,
        phone: Optional[str] = None,
    ) -> User:
        if self.get_user_by_email(email):
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            full_name=full_name,
            phone=phone,
            password_hash=get_password_hash(password),
        )
        self.db.add(user)
        self.db.flush()
        user.account_number = account_number_for(user)

        logger.info(f"User created: {user.id} - {user.email}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {email}")
            raise UnauthorizedError("Incorrect email or password")
        return user

    @storage_guard
    def get_profile(self, user_id: int) -> ProfileResponse:
        user = self._require_user(user_id)
        return project_profile(user, self._order_count(user_id))

    @transactional
    def update_profile(
        self, user_id: int, update_data: ProfileUpdateRequest
    ) -> ProfileResponse:
        user = self._require_user(user_id)

        clashes = [User.email == update_data.email]
        if update_data.phone:
            clashes.append(User.phone == update_data.phone)
        taken = (
            self.db.query(User.id)
            .filter(or_(*clashes), User.id != user_id)
            .first()
        )
        if taken:
            raise ConflictError("Email or phone already in use")

        user.full_name = update_data.full_name
        user.email = update_data.email
        user.phone = update_data.phone
        user.address = update_data.address
        user.city = update_data.city
        user.gender = update_data.gender

        self.db.flush()
        logger.info(f"Profile updated: {user.id}")
        return project_profile(user, self._order_count(user_id))

    @transactional
    def change_password(self, user_id: int, request: ChangePasswordRequest) -> None:
        if request.new_password != request.confirm_password:
            raise ValidationError("New passwords do not match")

        if len(request.new_password) < settings.MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
            )

        user = self._require_user(user_id)
        if not verify_password(request.current_password, user.password_hash):
            logger.warning(f"Password change for user {user_id}: wrong current password")
            raise UnauthorizedError("Current password is incorrect")

        user.password_hash = get_password_hash(request.new_password)
        logger.info(f"Password updated for user {user_id}")

    @storage_guard
    def get_stats(self, user_id: int) -> UserStatsResponse:
        user = self._require_user(user_id)
        count, spent, average, last_order = (
            self.db.query(
                func.count(Order.id),
                func.coalesce(func.sum(Order.total_amount), 0),
                func.coalesce(func.avg(Order.total_amount), 0),
                func.max(Order.created_at),
            )
            .filter(Order.user_id == user_id)
            .one()
        )
        return UserStatsResponse(
            member_points=int(user.member_points or 0),
            total_orders=int(count or 0),
            total_spent=float(spent or 0),
            avg_order_value=round(float(average or 0), 2),
            last_order_date=format_timestamp(last_order),
        )
