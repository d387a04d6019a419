from sqlalchemy import func, select, update
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from marketplace.middleware.transaction_handler import storage_guard, transactional
from marketplace.models.address import Address
from marketplace.models.user import User
from marketplace.schemas.address import AddressCreate, AddressResponse, AddressUpdate
from marketplace.utils.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("label", "full_name", "phone", "address_line1", "city")


def display_address(address: Address) -> str:
    parts = [address.address_line1, address.address_line2]
    if address.landmark:
        parts.append(f"Near {address.landmark}")
    if address.neighborhood and address.city:
        parts.append(f"{address.neighborhood}, {address.city}")
    else:
        parts.append(address.city)
    return ", ".join(part for part in parts if part)


def short_address(address: Address) -> str:
    parts = []
    if address.landmark:
        parts.append(f"Near {address.landmark}")
    parts.extend([address.city, address.neighborhood])
    return ", ".join(part for part in parts if part)


def project_address(address: Address) -> AddressResponse:
    return AddressResponse(
        id=address.id,
        user_id=address.user_id,
        label=address.label,
        full_name=address.full_name,
        phone=address.phone,
        address_line1=address.address_line1,
        address_line2=address.address_line2,
        city=address.city,
        neighborhood=address.neighborhood,
        landmark=address.landmark,
        latitude=address.latitude,
        longitude=address.longitude,
        is_default=bool(address.is_default),
        display_address=display_address(address),
        short_address=short_address(address),
        created_at=address.created_at,
        updated_at=address.updated_at,
    )


class AddressService:
    """
    Address book of one user.

    Invariant: a user with at least one address has exactly one default
    address, a user without addresses has none. Every mutation runs in a
    single transaction that first locks the owner's row, so concurrent
    mutations for the same user are serialised.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _lock_owner(self, user_id: int) -> None:
        owner = self.db.execute(
            select(User.id).where(User.id == user_id).with_for_update()
        ).first()
        if owner is None:
            raise NotFoundError("User not found")

    def _get_owned(self, user_id: int, address_id: int) -> Address:
        address = (
            self.db.query(Address)
            .filter(Address.id == address_id, Address.user_id == user_id)
            .first()
        )
        if not address:
            # Same answer whether the address is missing or someone else's
            logger.warning(f"Address {address_id} not found for user {user_id}")
            raise NotFoundError("Address not found")
        return address

    def _count(self, user_id: int, defaults_only: bool = False) -> int:
        query = select(func.count(Address.id)).where(Address.user_id == user_id)
        if defaults_only:
            query = query.where(Address.is_default.is_(True))
        return self.db.execute(query).scalar_one()

    def _clear_default(self, user_id: int, keep_id: Optional[int] = None) -> None:
        statement = update(Address).where(
            Address.user_id == user_id, Address.is_default.is_(True)
        )
        if keep_id is not None:
            statement = statement.where(Address.id != keep_id)
        self.db.execute(statement.values(is_default=False))

    def _assert_single_default(self, user_id: int) -> None:
        self.db.flush()
        total = self._count(user_id)
        defaults = self._count(user_id, defaults_only=True)
        expected = 1 if total else 0
        if defaults != expected:
            logger.error(
                f"Default address invariant broken for user {user_id}: "
                f"{defaults} default(s) among {total} address(es)"
            )
            raise ConflictError("Address book changed concurrently, please retry")

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    @storage_guard
    def list_addresses(self, user_id: int) -> List[AddressResponse]:
        addresses = (
            self.db.query(Address)
            .filter(Address.user_id == user_id)
            .order_by(
                Address.is_default.desc(),
                Address.created_at.desc(),
                Address.id.desc(),
            )
            .all()
        )
        return [project_address(address) for address in addresses]

    @transactional
    def add_address(self, user_id: int, data: AddressCreate) -> AddressResponse:
        """Create an address; the first one always becomes the default."""
        self._lock_owner(user_id)

        is_first = self._count(user_id) == 0
        make_default = is_first or data.is_default

        if make_default and not is_first:
            self._clear_default(user_id)

        fields = data.model_dump(exclude={"is_default"})
        address = Address(user_id=user_id, is_default=make_default, **fields)
        self.db.add(address)

        self._assert_single_default(user_id)
        logger.info(
            f"Address {address.id} created for user {user_id} (default={make_default})"
        )
        return project_address(address)

    @transactional
    def update_address(self, user_id: int, data: AddressUpdate) -> AddressResponse:
        self._lock_owner(user_id)
        address = self._get_owned(user_id, data.address_id)

        fields = data.model_dump(exclude_unset=True, exclude={"address_id", "is_default"})
        for name in REQUIRED_FIELDS:
            if name in fields and fields[name] is None:
                raise ValidationError(f"{name} cannot be empty")

        if not fields and data.is_default is None:
            raise ValidationError("No fields to update")

        for key, value in fields.items():
            setattr(address, key, value)

        # Unsetting the default is ignored: it only moves by picking another one
        if data.is_default and not address.is_default:
            self._clear_default(user_id, keep_id=address.id)
            address.is_default = True

        self._assert_single_default(user_id)
        logger.info(f"Address {address.id} updated for user {user_id}")
        return project_address(address)

    @transactional
    def set_default(self, user_id: int, address_id: int) -> AddressResponse:
        self._lock_owner(user_id)
        address = self._get_owned(user_id, address_id)

        self._clear_default(user_id, keep_id=address.id)
        address.is_default = True

        self._assert_single_default(user_id)
        logger.info(f"Default address of user {user_id} is now {address.id}")
        return project_address(address)

    @transactional
    def delete_address(self, user_id: int, address_id: int) -> Optional[AddressResponse]:
        """
        Delete an owned address.

        Returns the address promoted to default when the deleted one was the
        default and others remain (the most recently created), otherwise None.
        """
        self._lock_owner(user_id)
        address = self._get_owned(user_id, address_id)
        was_default = bool(address.is_default)

        self.db.delete(address)
        self.db.flush()

        promoted = None
        if was_default:
            promoted = (
                self.db.query(Address)
                .filter(Address.user_id == user_id)
                .order_by(Address.created_at.desc(), Address.id.desc())
                .first()
            )
            if promoted:
                promoted.is_default = True

        self._assert_single_default(user_id)
        logger.info(
            f"Address {address_id} deleted for user {user_id}"
            + (f", promoted {promoted.id} to default" if promoted else "")
        )
        return project_address(promoted) if promoted else None
