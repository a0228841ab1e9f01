from fastapi import APIRouter, Depends
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from studyhub.database import get_db
from studyhub.models import Comment, Like, Resource, Tag, User
from studyhub.schemas import MetricsResponse
from studyhub.cache import cache

router = APIRouter(prefix="/api/v1/metrics", tags=["metrics"])

@router.get("", response_model=MetricsResponse)
async def get_metrics(db: AsyncSession = Depends(get_db)):

    async def _count(model) -> int:
        return (await db.execute(select(func.count()).select_from(model))).scalar_one()

    return MetricsResponse(
        total_resources=await _count(Resource),
        total_tags=await _count(Tag),
        total_comments=await _count(Comment),
        total_votes=await _count(Like),
        total_users=await _count(User),
        cache_info=cache.stats,
    )
