# File: marketplace/schemas/user.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Credentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class SignupPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    username: Optional[str] = None
    lei: Optional[str] = Field(default=None, alias="LEI")
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    password: Optional[str] = None


class LoginPayload(Credentials):
    pass


class ProfileUpdatePayload(BaseModel):
    """Only the fields present in the request body are written."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    password: Optional[str] = None


class SignupUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: Optional[str] = None
    role: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    username: str
    lei: Optional[str] = Field(default=None, serialization_alias="LEI")
    email: Optional[str] = None
    phone: Optional[str] = None
    role: str
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None


class ProfileUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    role: str


class SignupResponse(BaseModel):
    message: str
    user: SignupUser


class LoginResponse(BaseModel):
    message: str
    user: UserRead


class ProfileUpdateResponse(BaseModel):
    message: str
    user: ProfileUser
