"""Identity module repository implementations."""

from typing import Optional
from framework.repository.base import BaseRepository
from .models import User


class UserRepository(BaseRepository[User]):
    """User repository."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Find user by (lowercased) email."""
        return await self.find_one(email=email.strip().lower())
