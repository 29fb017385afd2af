# File: marketplace/api/v1/routes_auth.py

"""
Account routes: signup, login and profile.

Profile routes authenticate from the same per-request credentials as every
other protected route.
"""

from fastapi import APIRouter, Depends, status

from marketplace.api.deps import get_principal, get_user_service
from marketplace.schemas.user import (
    LoginPayload,
    LoginResponse,
    ProfileUpdatePayload,
    ProfileUpdateResponse,
    SignupPayload,
    SignupResponse,
    UserRead,
)
from marketplace.services.auth_service import Principal
from marketplace.services.user_service import UserService

router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a supplier or buyer",
)
def signup(payload: SignupPayload, users: UserService = Depends(get_user_service)):
    user = users.signup(payload)
    return SignupResponse(message="User registered successfully.", user=user)


@router.post("/login", response_model=LoginResponse, summary="Check credentials")
def login(payload: LoginPayload, users: UserService = Depends(get_user_service)):
    user = users.login(payload)
    return LoginResponse(message="Login successful.", user=user)


@router.api_route(
    "/profile",
    methods=["GET", "POST"],
    response_model=UserRead,
    summary="Current user's profile",
)
def read_profile(
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(get_user_service),
):
    return users.get_profile(principal)


@router.put("/profile", response_model=ProfileUpdateResponse, summary="Update profile")
def update_profile(
    payload: ProfileUpdatePayload,
    principal: Principal = Depends(get_principal),
    users: UserService = Depends(get_user_service),
):
    user = users.update_profile(principal, payload)
    return ProfileUpdateResponse(message="Profile updated successfully.", user=user)
