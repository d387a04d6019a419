from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator
from typing import Optional
from datetime import datetime

from marketplace.utils.validators import validate_phone


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class AddressCreate(BaseModel):
    label: str = Field(..., min_length=1, max_length=100)
    full_name: str = Field(..., min_length=1, max_length=150)
    phone: str
    address_line1: str = Field(..., min_length=1, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    neighborhood: Optional[str] = Field(None, max_length=100)
    landmark: Optional[str] = Field(None, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    is_default: bool = False

    @field_validator(
        "label",
        "full_name",
        "phone",
        "address_line1",
        "address_line2",
        "city",
        "neighborhood",
        "landmark",
        mode="before",
    )
    @classmethod
    def strip_strings(cls, v):
        return _strip(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v):
        if not validate_phone(v):
            raise ValueError("Invalid phone number format")
        return v


class AddressUpdate(BaseModel):
    address_id: int = Field(validation_alias=AliasChoices("address_id", "id"))
    label: Optional[str] = Field(None, min_length=1, max_length=100)
    full_name: Optional[str] = Field(None, min_length=1, max_length=150)
    phone: Optional[str] = None
    address_line1: Optional[str] = Field(None, min_length=1, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    neighborhood: Optional[str] = Field(None, max_length=100)
    landmark: Optional[str] = Field(None, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    is_default: Optional[bool] = None

    @field_validator(
        "label",
        "full_name",
        "phone",
        "address_line1",
        "address_line2",
        "city",
        "neighborhood",
        "landmark",
        mode="before",
    )
    @classmethod
    def strip_strings(cls, v):
        return _strip(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v):
        if v is not None and not validate_phone(v):
            raise ValueError("Invalid phone number format")
        return v


class AddressIdRequest(BaseModel):
    address_id: int = Field(validation_alias=AliasChoices("address_id", "id"))


class AddressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    label: str
    full_name: str
    phone: str
    address_line1: str
    address_line2: Optional[str]
    city: str
    neighborhood: Optional[str]
    landmark: Optional[str]
    latitude: Optional[float]
    longitude: Optional[float]
    is_default: bool
    display_address: str
    short_address: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
