from fastapi import APIRouter, Depends, Response, status
from framework.repository.unit_of_work import UnitOfWork, get_uow
from framework.response import ResponseModel
from framework.security import CurrentUser, create_user_token, get_current_user
from framework.config import settings
from ..models import User
from ..service import IdentityService
from pydantic import BaseModel, Field
from typing import Optional
from datetime import timedelta

router = APIRouter()

class RegisterSchema(BaseModel):
    name: str
    email: str
    password: str = Field(min_length=6)

class LoginSchema(BaseModel):
    email: str
    password: str

class ProfileUpdateSchema(BaseModel):
    name: Optional[str] = None
    business_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    currency: Optional[str] = None

def get_identity_service(uow: UnitOfWork = Depends(get_uow)) -> IdentityService:
    """Dependency: create IdentityService."""
    return IdentityService(uow)

def _profile(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "business_name": user.business_name,
        "phone": user.phone,
        "address": user.address,
        "currency": user.currency,
        "role": user.role,
        "role_ids": user.role_ids or [],
    }

def _issue_token(user: User, response: Response) -> str:
    expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_user_token(user.id, user.email, user.role, expires_delta=expires_delta)
    response.set_cookie(
        key=settings.ACCESS_TOKEN_COOKIE_NAME,
        value=access_token,
        max_age=int(expires_delta.total_seconds()),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE
    )
    return access_token

@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterSchema,
    response: Response,
    service: IdentityService = Depends(get_identity_service)
):
    """Register a new account (role: owner) and return a token."""
    user = await service.register_user(data.name, data.email, data.password)
    token = _issue_token(user, response)
    return {**_profile(user), "token": token, "token_type": "bearer"}

@router.post("/login")
async def login(
    data: LoginSchema,
    response: Response,
    service: IdentityService = Depends(get_identity_service)
):
    """Login: return JWT and set cookie."""
    user = await service.authenticate_user(data.email, data.password)
    token = _issue_token(user, response)
    return {**_profile(user), "token": token, "token_type": "bearer"}

@router.post("/logout")
async def logout(response: Response):
    """Logout: clear token cookie."""
    response.delete_cookie(
        key=settings.ACCESS_TOKEN_COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE
    )
    return ResponseModel.success("Logged out successfully")

@router.get("/me")
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    service: IdentityService = Depends(get_identity_service)
):
    user = await service.get_profile(current_user.id)
    return _profile(user)

@router.put("/me")
async def update_me(
    data: ProfileUpdateSchema,
    current_user: CurrentUser = Depends(get_current_user),
    service: IdentityService = Depends(get_identity_service)
):
    user = await service.update_profile(current_user.id, data.model_dump(exclude_unset=True))
    return _profile(user)
