"""Restaurant persistence service."""
import hashlib
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.db.models import Restaurant


def hash_dashboard_token(token: str) -> str:
    """Hash a dashboard token for storage and lookup."""
    return hashlib.sha256(token.encode()).hexdigest()


class RestaurantPersistenceService:
    """Service for restaurant directory lookups.

    Dashboard tokens are never stored; only their SHA-256 digests are.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate_dashboard_token(self, token: str) -> Optional[Restaurant]:
        """Get the restaurant owning a dashboard token."""
        if not token:
            return None
        result = await self.db.execute(
            select(Restaurant).where(
                Restaurant.dashboard_token_hash == hash_dashboard_token(token)
            )
        )
        return result.scalar_one_or_none()
