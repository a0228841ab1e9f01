"""
Tag service — the tag catalog and resource/tag association.

Both batch operations (``create_tags`` and ``associate_tags``) process
the whole input before classifying it: each item is either applied or
reported as already present, and the overall status follows from the two
partitions (see ``outcomes.BatchOutcome``).  Re-running an association
with the same tag ids is therefore a no-op that reports every link as
already associated.
"""
import logging

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.cache import cache
from studyhub.models import Resource, Tag, resource_tags
from studyhub.schemas import TagCreate
from studyhub.services.outcomes import Outcome, Status, apply_batch

logger = logging.getLogger(__name__)

_CREATE_MESSAGES = {
    Status.SUCCESS: "all tags were successfully added",
    Status.PARTIAL: "some tags were successfully added",
    Status.FAILURE: "no tags were successfully added",
}

_ASSOCIATE_MESSAGES = {
    Status.SUCCESS: "Associated existing tags with an existing resource",
    Status.PARTIAL: "Associated some existing tags with an existing resource",
    Status.FAILURE: "No tags were associated with this resource",
}


def tag_to_dict(tag: Tag) -> dict:
    return {"tag_id": tag.tag_id, "tag_name": tag.tag_name, "tag_colour": tag.tag_colour}


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

async def list_tags(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Tag).order_by(Tag.tag_id))
    return [tag_to_dict(t) for t in result.scalars().all()]


async def get_tag(db: AsyncSession, tag_id: int) -> dict | None:
    tag = await db.get(Tag, tag_id)
    return tag_to_dict(tag) if tag is not None else None


async def get_resource_tags(db: AsyncSession, resource_id: int) -> list[dict]:
    q = (
        select(Tag)
        .join(resource_tags, resource_tags.c.tag_id == Tag.tag_id)
        .where(resource_tags.c.resource_id == resource_id)
        .order_by(Tag.tag_id)
    )
    result = await db.execute(q)
    return [tag_to_dict(t) for t in result.scalars().all()]


# ---------------------------------------------------------------------------
# Batch writes
# ---------------------------------------------------------------------------

async def create_tags(db: AsyncSession, tags: list[TagCreate]) -> Outcome:
    """
    Insert every tag whose name is not taken yet.

    ``data["added"]`` lists the new rows and ``data["duplicates"]`` the
    existing rows that blocked an insert.  A name repeated inside the
    batch is inserted once and reported as a duplicate afterwards.
    """

    async def _create_one(tag: TagCreate) -> tuple[bool, dict]:
        q = select(Tag).where(Tag.tag_name == tag.tag_name)
        existing = (await db.execute(q)).scalar_one_or_none()
        if existing is not None:
            return False, tag_to_dict(existing)
        new_tag = Tag(tag_name=tag.tag_name, tag_colour=tag.tag_colour)
        db.add(new_tag)
        await db.flush()
        return True, tag_to_dict(new_tag)

    batch = await apply_batch(tags, _create_one)
    logger.info("Tag batch: %d added, %d duplicates", len(batch.applied), len(batch.already_present))
    return Outcome(
        batch.status,
        _CREATE_MESSAGES[batch.status],
        {"added": batch.applied, "duplicates": batch.already_present},
    )


async def associate_tags(db: AsyncSession, resource_id: int, tag_ids: list[int]) -> Outcome:
    """
    Link existing tags to an existing resource.

    Returns ``not found`` without touching any link when the resource or
    any of the tags does not exist.  Otherwise ``data["associated"]`` holds
    the new links and ``data["already_associated"]`` the links that were
    already there.
    """
    if await db.get(Resource, resource_id) is None:
        return Outcome(Status.NOT_FOUND, f"No resource with id {resource_id}")

    found = await db.execute(select(Tag.tag_id).where(Tag.tag_id.in_(set(tag_ids))))
    missing = sorted(set(tag_ids) - set(found.scalars().all()))
    if missing:
        return Outcome(Status.NOT_FOUND, "Some tags do not exist", {"missing_tag_ids": missing})

    async def _link_one(tag_id: int) -> tuple[bool, dict]:
        link = {"resource_id": resource_id, "tag_id": tag_id}
        q = select(resource_tags).where(
            resource_tags.c.resource_id == resource_id,
            resource_tags.c.tag_id == tag_id,
        )
        if (await db.execute(q)).first() is not None:
            return False, link
        await db.execute(insert(resource_tags).values(**link))
        return True, link

    batch = await apply_batch(tag_ids, _link_one)
    if batch.applied:
        cache.invalidate_resource(db, resource_id)
    logger.info(
        "Resource %s: %d tag(s) associated, %d already associated",
        resource_id,
        len(batch.applied),
        len(batch.already_present),
    )
    return Outcome(
        batch.status,
        _ASSOCIATE_MESSAGES[batch.status],
        {"associated": batch.applied, "already_associated": batch.already_present},
    )
