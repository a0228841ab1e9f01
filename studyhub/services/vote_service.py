"""
Vote service — the like/dislike ledger.

Each (author, resource) pair holds at most one vote.  Casting a vote
replaces any previous one (delete then insert inside the caller's
transaction); the ``uq_likes_author_resource`` constraint guards the
pair if two requests race.

The grouped-count subqueries built here are joined into every annotated
resource read, so counts for a resource without votes come back as 0
through ``COALESCE`` rather than NULL.
"""
import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.cache import cache
from studyhub.models import Like, Resource
from studyhub.services.outcomes import Outcome, Status

logger = logging.getLogger(__name__)


def _like_to_dict(like: Like) -> dict:
    return {
        "id": like.id,
        "author_id": like.author_id,
        "resource_id": like.resource_id,
        "liked": like.liked,
    }


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def vote_count_subqueries():
    """Return ``(likes, dislikes)`` subqueries grouped by ``resource_id``."""
    likes = (
        select(Like.resource_id, func.count().label("like_count"))
        .where(Like.liked.is_(True))
        .group_by(Like.resource_id)
        .subquery("like_counts")
    )
    dislikes = (
        select(Like.resource_id, func.count().label("dislike_count"))
        .where(Like.liked.is_(False))
        .group_by(Like.resource_id)
        .subquery("dislike_counts")
    )
    return likes, dislikes


async def _count_votes(db: AsyncSession, resource_id: int, liked: bool) -> int:
    q = (
        select(func.count())
        .select_from(Like)
        .where(Like.resource_id == resource_id, Like.liked.is_(liked))
    )
    return (await db.execute(q)).scalar_one()


async def like_count(db: AsyncSession, resource_id: int) -> int:
    return await _count_votes(db, resource_id, True)


async def dislike_count(db: AsyncSession, resource_id: int) -> int:
    return await _count_votes(db, resource_id, False)


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_vote_status(db: AsyncSession, resource_id: int, author_id: int) -> bool | None:
    """
    Return ``liked`` for the pair, or None when the author has not voted.

    None means "no opinion" and is distinct from False ("disliked").
    """
    q = select(Like.liked).where(Like.author_id == author_id, Like.resource_id == resource_id)
    return (await db.execute(q)).scalar_one_or_none()


async def cast_vote(db: AsyncSession, resource_id: int, author_id: int, liked: bool) -> Outcome:
    """Record *liked* for the pair, replacing any earlier vote."""
    if await db.get(Resource, resource_id) is None:
        return Outcome(Status.NOT_FOUND, f"No resource with id {resource_id}")

    await db.execute(
        delete(Like).where(Like.author_id == author_id, Like.resource_id == resource_id)
    )
    like = Like(author_id=author_id, resource_id=resource_id, liked=liked)
    db.add(like)
    await db.flush()

    cache.invalidate_resource(db, resource_id)
    logger.info("User %s %s resource %s", author_id, "liked" if liked else "disliked", resource_id)
    return Outcome(
        Status.SUCCESS,
        f"{'Liked' if liked else 'Disliked'} resource with id {resource_id}",
        _like_to_dict(like),
    )


async def remove_vote(db: AsyncSession, resource_id: int, author_id: int) -> dict | None:
    """Delete the pair's vote and return it, or None when there was none."""
    q = select(Like).where(Like.author_id == author_id, Like.resource_id == resource_id)
    like = (await db.execute(q)).scalar_one_or_none()
    if like is None:
        return None

    data = _like_to_dict(like)
    await db.delete(like)
    await db.flush()
    cache.invalidate_resource(db, resource_id)
    return data
