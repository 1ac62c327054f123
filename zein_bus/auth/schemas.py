from pydantic import BaseModel, EmailStr, field_validator
from typing import List, Optional

from zein_bus.bookings.schemas import BookingRecord

class LoginRequest(BaseModel):
    identifier: str  # username or email
    password: str

class RegisterRequest(BaseModel):
    username: str
    email: EmailStr
    password: str
    confirm_password: Optional[str] = None
    first_name: str
    last_name: str
    phone_number: str
    area: str
    start_point: str
    university: str
    faculty: str

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v, info):
        if v is not None and v != info.data.get("password"):
            raise ValueError("Passwords do not match")
        return v

class AuthResult(BaseModel):
    jwt: str
    user_id: str
    username: Optional[str] = None
    email: Optional[str] = None

class UserProfile(BaseModel):
    """Commuter profile held by the backend"""
    id: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    area: Optional[str] = None
    start_point: Optional[str] = None
    university: Optional[str] = None
    faculty: Optional[str] = None
    confirmed: Optional[bool] = None
    subscription: Optional[str] = None
    bookings: List[BookingRecord] = []
