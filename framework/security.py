from datetime import datetime, timedelta, timezone
from typing import List, Optional, Set
from jose import jwt, JWTError
from loguru import logger
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.config import settings
from framework.database.manager import get_db
from framework.exceptions.handler import ForbiddenError

# Roles that pass every permission check
SUPERUSER_ROLES = ("owner", "admin")

# 1. Password hashing (BCrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# 2. OAuth2 scheme and token URL (cookie is checked first, header second)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_AUTH_PREFIX}/login", auto_error=False)

# --- Core models ---

class CurrentUser(BaseModel):
    """Current logged-in user context; `id` is the owner id of every resource they touch."""
    id: int
    email: str
    role: str
    role_ids: List[str] = []

# --- Helpers ---

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt

def create_user_token(user_id: int, email: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Token carrying the claims get_current_user reads back."""
    return create_access_token(
        data={"sub": email, "user_id": user_id, "role": role},
        expires_delta=expires_delta
    )

# --- FastAPI dependencies ---

def get_token_from_request(
    request: Request,
    token_from_header: Optional[str] = Depends(oauth2_scheme)
) -> Optional[str]:
    """
    Get token from request: prefer cookie, then Authorization header.
    """
    cookie_name = settings.ACCESS_TOKEN_COOKIE_NAME
    token = request.cookies.get(cookie_name)

    if not token and token_from_header:
        token = token_from_header

    return token

async def get_current_user(
    token: Optional[str] = Depends(get_token_from_request),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """
    Dependency: validate token and load the user. Use in router as user: CurrentUser = Depends(get_current_user).

    The token only proves identity; role and assigned roles are read from the
    users table on every request so demotions apply to tokens already issued.
    """
    # apps.identity imports the framework, so the model is resolved at call time
    from apps.identity.models import User

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise credentials_exception

    email = payload.get("sub")
    user_id = payload.get("user_id")

    if email is None or not isinstance(user_id, int):
        raise credentials_exception

    user = await db.get(User, user_id)
    if user is None:
        raise credentials_exception

    return CurrentUser(id=user.id, email=user.email, role=user.role, role_ids=list(user.role_ids or []))

def require_roles(*roles: str):
    """
    Dependency factory: allow only users whose role is one of `roles`.

    Usage: dependencies=[Depends(require_roles("owner", "admin"))]
    """
    def _check(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise ForbiddenError("Insufficient role", detail={"required": list(roles)})
        return user

    return _check

async def effective_permission_codes(db: AsyncSession, user: CurrentUser) -> Set[str]:
    """Permission codes granted through the user's assigned roles; owner/admin get {"*"}."""
    from apps.access.models import Permission, Role

    if user.role in SUPERUSER_ROLES:
        return {"*"}
    if not user.role_ids:
        return set()

    roles = await db.exec(select(Role).where(Role.id.in_(user.role_ids)))
    permission_ids = {pid for role in roles.all() for pid in (role.permissions or [])}
    if not permission_ids:
        return set()

    codes = await db.exec(select(Permission.code).where(Permission.id.in_(permission_ids)))
    return set(codes.all())

def require_permissions(*codes: str):
    """
    Dependency factory: allow users holding any of `codes` through their roles.

    Usage: dependencies=[Depends(require_permissions("invoices:read"))]
    """
    async def _check(
        user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
    ) -> CurrentUser:
        granted = await effective_permission_codes(db, user)
        if "*" in granted or any(code in granted for code in codes):
            return user
        logger.warning(f"Permission denied | User: {user.id} | Required: {list(codes)}")
        raise ForbiddenError("Insufficient permissions", detail={"required": list(codes)})

    return _check
