"""
Resource service — business logic for the resource catalog.

Design notes
------------
- Annotated reads (list, detail, and the study list built on the same
  query) cost two statements regardless of row count: one SELECT joining
  the author and the like/dislike group counts, and one batched tag
  lookup keyed by every resource id in the result.
- List and detail reads use the cache-aside pattern (Redis, then the
  database).  Every write that changes what a read returns marks the
  affected keys stale on the session; ``get_db`` deletes them once the
  transaction has committed.
- ``url`` is unique at the storage level.  ``create_resource`` checks it
  first so a duplicate comes back with the conflicting row; if a
  concurrent insert slips past the check, the constraint raises
  ``IntegrityError`` and the request fails with a conflict.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
import logging
from collections import defaultdict

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.cache import DETAIL_KEY, LIST_KEY, cache
from studyhub.config import settings
from studyhub.models import Comment, Like, Resource, StudyListEntry, Tag, User, resource_tags
from studyhub.schemas import ResourceCreate, ResourceUpdate
from studyhub.services.outcomes import Outcome, Status
from studyhub.services.tag_service import tag_to_dict
from studyhub.services.vote_service import vote_count_subqueries

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def resource_to_dict(resource: Resource) -> dict:
    """Serialise the stored columns of a Resource."""
    return {
        "id": resource.id,
        "author_id": resource.author_id,
        "title": resource.title,
        "description": resource.description,
        "type": resource.type,
        "recommended": resource.recommended,
        "url": resource.url,
        "week": resource.week,
        "date_added": resource.date_added.isoformat() if resource.date_added else None,
    }


def annotated_row_to_dict(row) -> dict:
    """Serialise one row of ``annotated_resources_query`` (tags not included)."""
    data = resource_to_dict(row.Resource)
    data["name"] = row.name
    data["is_faculty"] = row.is_faculty
    data["likes"] = int(row.likes)
    data["dislikes"] = int(row.dislikes)
    return data


# ---------------------------------------------------------------------------
# Query helpers (shared with study_list_service)
# ---------------------------------------------------------------------------

def annotated_resources_query():
    """
    SELECT resources with author name/faculty flag and vote counts,
    newest first.
    """
    likes, dislikes = vote_count_subqueries()
    return (
        select(
            Resource,
            User.name,
            User.is_faculty,
            func.coalesce(likes.c.like_count, 0).label("likes"),
            func.coalesce(dislikes.c.dislike_count, 0).label("dislikes"),
        )
        .join(User, User.id == Resource.author_id)
        .outerjoin(likes, likes.c.resource_id == Resource.id)
        .outerjoin(dislikes, dislikes.c.resource_id == Resource.id)
        .order_by(Resource.date_added.desc(), Resource.id.desc())
    )


async def attach_tags(db: AsyncSession, items: list[dict]) -> list[dict]:
    """Set ``tags`` on every item using a single query for the whole list."""
    if not items:
        return items

    q = (
        select(resource_tags.c.resource_id, Tag)
        .join(Tag, Tag.tag_id == resource_tags.c.tag_id)
        .where(resource_tags.c.resource_id.in_([item["id"] for item in items]))
        .order_by(Tag.tag_id)
    )
    tags_by_resource: dict[int, list[dict]] = defaultdict(list)
    for resource_id, tag in (await db.execute(q)).all():
        tags_by_resource[resource_id].append(tag_to_dict(tag))

    for item in items:
        item["tags"] = tags_by_resource.get(item["id"], [])
    return items


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def list_resources(db: AsyncSession) -> list[dict]:
    """Return every resource, annotated, newest first."""
    cached = await cache.get(LIST_KEY)
    if cached is not None:
        return cached

    rows = (await db.execute(annotated_resources_query())).all()
    items = await attach_tags(db, [annotated_row_to_dict(row) for row in rows])

    await cache.set(LIST_KEY, items, ttl=settings.CACHE_TTL_LIST)
    return items


async def get_resource(db: AsyncSession, resource_id: int) -> dict | None:
    """
    Return the annotated resource, or None when it does not exist.

    Absence is not an error here; the caller decides how to report it.
    """
    cache_key = DETAIL_KEY.format(resource_id=resource_id)
    cached = await cache.get(cache_key)
    if cached is not None:
        return cached

    q = annotated_resources_query().where(Resource.id == resource_id)
    row = (await db.execute(q)).first()
    if row is None:
        return None

    (data,) = await attach_tags(db, [annotated_row_to_dict(row)])
    await cache.set(cache_key, data, ttl=settings.CACHE_TTL_DETAIL)
    return data


async def create_resource(db: AsyncSession, data: ResourceCreate) -> Outcome:
    """
    Insert a resource unless its URL is already catalogued.

    On a duplicate URL nothing is inserted and the outcome carries the
    existing row.
    """
    q = select(Resource).where(Resource.url == data.url)
    existing = (await db.execute(q)).scalar_one_or_none()
    if existing is not None:
        logger.info("Rejected duplicate resource url=%r (existing id=%s)", data.url, existing.id)
        return Outcome(Status.FAIL, "Trying to add duplicate resource", resource_to_dict(existing))

    resource = Resource(**data.model_dump())
    db.add(resource)
    await db.flush()
    await db.refresh(resource)

    cache.invalidate_resource(db)
    logger.info("Created resource id=%s url=%r", resource.id, resource.url)
    return Outcome(Status.SUCCESS, "Added a new resource", resource_to_dict(resource))


async def update_resource(db: AsyncSession, resource_id: int, data: ResourceUpdate) -> Outcome:
    """
    Replace ``title``, ``description``, ``recommended`` and ``url``.

    The URL is not re-checked here; a clash with another resource is
    rejected by the unique constraint when the change is flushed.
    """
    resource = await db.get(Resource, resource_id)
    if resource is None:
        return Outcome(Status.NOT_FOUND, "There was no resource to update")

    for field, value in data.model_dump().items():
        setattr(resource, field, value)
    await db.flush()

    cache.invalidate_resource(db, resource_id)
    return Outcome(Status.SUCCESS, "Updated a resource", resource_to_dict(resource))


async def delete_resource(db: AsyncSession, resource_id: int) -> Outcome:
    """
    Delete a resource together with its tag links, votes, study-list
    entries and comments.

    A missing resource is reported as ``not found`` and nothing is deleted.
    """
    resource = await db.get(Resource, resource_id)
    if resource is None:
        return Outcome(Status.NOT_FOUND, "There was no resource to delete")

    data = resource_to_dict(resource)
    await db.execute(delete(resource_tags).where(resource_tags.c.resource_id == resource_id))
    await db.execute(delete(Like).where(Like.resource_id == resource_id))
    await db.execute(delete(StudyListEntry).where(StudyListEntry.resource_id == resource_id))
    await db.execute(delete(Comment).where(Comment.resource_id == resource_id))
    await db.delete(resource)
    await db.flush()

    cache.invalidate_resource(db, resource_id)
    logger.info("Deleted resource id=%s", resource_id)
    return Outcome(Status.SUCCESS, "Deleted a resource", data)
