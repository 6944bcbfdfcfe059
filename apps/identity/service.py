from typing import Optional
from loguru import logger
from framework.security import get_password_hash, verify_password
from framework.exceptions.handler import BusinessException, NotFoundError, UnauthorizedError, ValidationError
from framework.repository.unit_of_work import UnitOfWork
from sqlalchemy.exc import IntegrityError
from .models import User
from .repository import UserRepository

CURRENCIES = ("GHS", "USD", "EUR", "GBP", "NGN", "KES", "ZAR", "XOF", "XAF")

class IdentityService:
    def __init__(self, uow: UnitOfWork):
        """Initialize Identity Service with UnitOfWork."""
        self.uow = uow

    @property
    def users(self) -> UserRepository:
        return self.uow.get_repository(UserRepository)

    async def register_user(self, name: str, email: str, password: str) -> User:
        """Register a new account; the first user of an account is its owner."""
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name:
            raise ValidationError("Name is required")
        if "@" not in email:
            raise ValidationError("Please provide a valid email")

        if await self.users.get_by_email(email):
            raise ValidationError("User already exists")

        try:
            new_user = User(
                name=name,
                email=email,
                hashed_password=get_password_hash(password),
                role="owner"
            )
            await self.users.create(new_user)
            await self.uow.commit()
            await self.uow.refresh(new_user)
            logger.info(f"User {email} registered (id={new_user.id})")
            return new_user

        except IntegrityError as e:
            await self.uow.rollback()
            error_msg = str(e.orig) if hasattr(e, 'orig') else str(e)
            if any(keyword in error_msg.lower() for keyword in [
                'email',
                'users.email',
                'duplicate entry',
                'unique constraint'
            ]):
                logger.warning(f"Email {email} already registered")
                raise ValidationError("User already exists")
            logger.error(f"Database integrity error: {error_msg}")
            raise BusinessException("Registration failed: data conflict")

    async def authenticate_user(self, email: str, password: str) -> User:
        """Authenticate user by email and password."""
        user = await self.users.get_by_email(email or "")
        if not user or not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Invalid credentials")

        logger.info(f"User {user.email} authenticated successfully")
        return user

    async def get_profile(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, user_id: int, changes: dict) -> User:
        """Partial profile update (only keys present are written)."""
        user = await self.get_profile(user_id)

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError("Name is required")
            user.name = name
        for field in ("business_name", "phone", "address"):
            if field in changes:
                setattr(user, field, (changes[field] or "").strip())
        if "currency" in changes and changes["currency"] is not None:
            currency: Optional[str] = changes["currency"].strip().upper()
            if currency not in CURRENCIES:
                raise ValidationError(f"Invalid currency: must be one of {', '.join(CURRENCIES)}")
            user.currency = currency

        await self.users.update(user)
        await self.uow.commit()
        await self.uow.refresh(user)
        return user
