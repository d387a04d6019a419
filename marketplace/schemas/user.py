from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime

from marketplace.utils.validators import clean_phone_number


class ProfileResponse(BaseModel):
    id: int
    account_number: str
    name: str
    full_name: str
    email: str
    phone: str
    address: str
    city: str
    gender: str
    avatar: Optional[str]
    wallet_balance: float
    member_level: str
    member_points: int
    total_orders: int
    verified: bool
    member_since: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class ProfileUpdateRequest(BaseModel):
    full_name: str = Field(..., max_length=150)
    email: EmailStr
    phone: Optional[str] = None
    address: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    gender: Optional[str] = Field(None, max_length=20)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Full name is required")
        return v.strip()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if not v or not v.strip():
            return None
        cleaned = clean_phone_number(v)
        if len(cleaned) < 10:
            raise ValueError("Enter a valid phone number")
        return cleaned

    @field_validator("address", "city")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if v else v


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)


class UserStatsResponse(BaseModel):
    member_points: int
    total_orders: int
    total_spent: float
    avg_order_value: float
    last_order_date: Optional[str]
