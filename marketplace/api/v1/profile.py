"""
Account endpoint of the authenticated customer.

One path, dispatched on ``action`` (query string for GET, body field for
POST/PUT/DELETE). Each action is bound to exactly one HTTP verb.
"""

from fastapi import APIRouter, Body, Depends, Request
from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type
import logging

from marketplace.core.database import get_db
from marketplace.core.dependencies import get_current_user_id
from marketplace.middleware.error_handler import describe_validation_errors
from marketplace.schemas.address import AddressCreate, AddressIdRequest, AddressUpdate
from marketplace.schemas.common import ApiResponse
from marketplace.schemas.user import ChangePasswordRequest, ProfileUpdateRequest
from marketplace.services.address_service import AddressService
from marketplace.services.filter_builder import (
    ENTITY_ORDER,
    clamp_limit,
    clamp_offset,
    default_limit,
)
from marketplace.services.order_service import OrderService
from marketplace.services.user_service import UserService
from marketplace.utils.exceptions import MethodNotAllowedError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])

Handler = Callable[[Mapping[str, Any], int, Session], ApiResponse]


def parse_payload(schema: Type[BaseModel], payload: Mapping[str, Any]) -> BaseModel:
    try:
        return schema.model_validate(dict(payload))
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_errors(e.errors()))


def get_profile(payload, user_id: int, db: Session) -> ApiResponse:
    profile = UserService(db).get_profile(user_id)
    return ApiResponse(
        message="Profile retrieved successfully",
        data={"user": profile.model_dump(mode="json")},
    )


def get_stats(payload, user_id: int, db: Session) -> ApiResponse:
    stats = UserService(db).get_stats(user_id)
    return ApiResponse(
        message="Stats retrieved successfully", data={"stats": stats.model_dump()}
    )


def update_profile(payload, user_id: int, db: Session) -> ApiResponse:
    request = parse_payload(ProfileUpdateRequest, payload)
    profile = UserService(db).update_profile(user_id, request)
    return ApiResponse(
        message="Profile updated successfully",
        data={"user": profile.model_dump(mode="json")},
    )


def change_password(payload, user_id: int, db: Session) -> ApiResponse:
    request = parse_payload(ChangePasswordRequest, payload)
    UserService(db).change_password(user_id, request)
    return ApiResponse(message="Password changed successfully")


def list_addresses(payload, user_id: int, db: Session) -> ApiResponse:
    addresses = AddressService(db).list_addresses(user_id)
    return ApiResponse(
        message="Addresses retrieved successfully",
        data={
            "addresses": [a.model_dump(mode="json") for a in addresses],
            "count": len(addresses),
        },
    )


def add_address(payload, user_id: int, db: Session) -> ApiResponse:
    request = parse_payload(AddressCreate, payload)
    address = AddressService(db).add_address(user_id, request)
    return ApiResponse(
        message="Address added successfully",
        data={"address": address.model_dump(mode="json")},
    )


def update_address(payload, user_id: int, db: Session) -> ApiResponse:
    request = parse_payload(AddressUpdate, payload)
    address = AddressService(db).update_address(user_id, request)
    return ApiResponse(
        message="Address updated successfully",
        data={"address": address.model_dump(mode="json")},
    )


def set_default_address(payload, user_id: int, db: Session) -> ApiResponse:
    request = parse_payload(AddressIdRequest, payload)
    address = AddressService(db).set_default(user_id, request.address_id)
    return ApiResponse(
        message="Default address updated",
        data={"address": address.model_dump(mode="json")},
    )


def delete_address(payload, user_id: int, db: Session) -> ApiResponse:
    request = parse_payload(AddressIdRequest, payload)
    promoted = AddressService(db).delete_address(user_id, request.address_id)
    return ApiResponse(
        message="Address deleted successfully",
        data={
            "deleted_id": request.address_id,
            "new_default": promoted.model_dump(mode="json") if promoted else None,
        },
    )


def list_orders(payload, user_id: int, db: Session) -> ApiResponse:
    page = OrderService(db).list_orders(
        user_id,
        limit=clamp_limit(payload.get("limit"), default_limit(ENTITY_ORDER)),
        offset=clamp_offset(payload.get("offset")),
        status=payload.get("status"),
    )
    return ApiResponse(
        message="Orders retrieved successfully",
        data={
            "orders": [o.model_dump(mode="json") for o in page.items],
            "count": page.count,
            "total": page.total,
        },
    )


ACTIONS: Dict[str, Tuple[str, Handler]] = {
    "get_profile": ("GET", get_profile),
    "stats": ("GET", get_stats),
    "addresses": ("GET", list_addresses),
    "orders": ("GET", list_orders),
    "add_address": ("POST", add_address),
    "update_profile": ("POST", update_profile),
    "change_password": ("POST", change_password),
    "set_default_address": ("PUT", set_default_address),
    "update_address": ("PUT", update_address),
    "delete_address": ("DELETE", delete_address),
}


def dispatch(
    method: str, action: Optional[str], payload: Mapping[str, Any], user_id: int, db: Session
) -> ApiResponse:
    if not action:
        raise ValidationError("Action is required")

    if action not in ACTIONS:
        raise ValidationError("Invalid action")

    expected_method, handler = ACTIONS[action]
    if method != expected_method:
        raise MethodNotAllowedError(f"Use {expected_method} for {action}")

    logger.debug(f"profile action {action} for user {user_id}")
    return handler(payload, user_id, db)


@router.get("", response_model=ApiResponse)
def profile_read(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    params = dict(request.query_params)
    return dispatch("GET", params.get("action") or "get_profile", params, user_id, db)


@router.post("", response_model=ApiResponse)
def profile_create(
    payload: Optional[Dict[str, Any]] = Body(None),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    payload = payload or {}
    return dispatch("POST", payload.get("action"), payload, user_id, db)


@router.put("", response_model=ApiResponse)
def profile_update(
    payload: Optional[Dict[str, Any]] = Body(None),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    payload = payload or {}
    return dispatch("PUT", payload.get("action"), payload, user_id, db)


@router.delete("", response_model=ApiResponse)
def profile_delete(
    payload: Optional[Dict[str, Any]] = Body(None),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    payload = payload or {}
    return dispatch("DELETE", payload.get("action"), payload, user_id, db)
