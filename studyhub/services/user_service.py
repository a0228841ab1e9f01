"""
User service — read-only access to users.

Users are managed outside the catalog; this module only lists them.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.models import User


def _user_to_dict(user: User) -> dict:
    return {"id": user.id, "name": user.name, "is_faculty": user.is_faculty}


async def get_users(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(User).order_by(User.id))
    return [_user_to_dict(u) for u in result.scalars().all()]
