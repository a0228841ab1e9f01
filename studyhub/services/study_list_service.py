"""
Study list service — per-user bookmarks with a studied flag.

A (user, resource) pair is bookmarked at most once; the composite primary
key on ``study_list`` enforces it and ``add_entry`` checks first so a
repeated bookmark is reported with the existing entry.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.models import Resource, StudyListEntry
from studyhub.services.outcomes import Outcome, Status
from studyhub.services.resource_service import (
    annotated_resources_query,
    annotated_row_to_dict,
    attach_tags,
)

logger = logging.getLogger(__name__)


def _entry_to_dict(entry: StudyListEntry) -> dict:
    return {
        "user_id": entry.user_id,
        "resource_id": entry.resource_id,
        "studied": entry.studied,
    }


async def list_for_user(db: AsyncSession, user_id: int) -> list[dict]:
    """Return the user's bookmarked resources, annotated, newest first."""
    q = (
        annotated_resources_query()
        .add_columns(StudyListEntry.studied)
        .join(StudyListEntry, StudyListEntry.resource_id == Resource.id)
        .where(StudyListEntry.user_id == user_id)
    )
    items = []
    for row in (await db.execute(q)).all():
        data = annotated_row_to_dict(row)
        data["studied"] = row.studied
        items.append(data)
    return await attach_tags(db, items)


async def get_status(db: AsyncSession, user_id: int, resource_id: int) -> bool:
    """True when the resource is on the user's list, whatever its studied flag."""
    return await db.get(StudyListEntry, (user_id, resource_id)) is not None


async def add_entry(db: AsyncSession, user_id: int, resource_id: int) -> Outcome:
    """Bookmark a resource; returns ``not found`` or ``fail`` without inserting anything."""
    if await db.get(Resource, resource_id) is None:
        return Outcome(Status.NOT_FOUND, f"No resource with id {resource_id}")

    existing = await db.get(StudyListEntry, (user_id, resource_id))
    if existing is not None:
        return Outcome(
            Status.FAIL,
            "Resource is already on this study list",
            _entry_to_dict(existing),
        )

    entry = StudyListEntry(user_id=user_id, resource_id=resource_id, studied=False)
    db.add(entry)
    await db.flush()
    logger.info("User %s bookmarked resource %s", user_id, resource_id)
    return Outcome(
        Status.SUCCESS,
        "Added a resource to the study list of a specific user",
        _entry_to_dict(entry),
    )


async def update_studied(
    db: AsyncSession, user_id: int, resource_id: int, studied: bool
) -> Outcome:
    """
    Set the studied flag of an existing entry.

    A missing entry is reported as ``not found``; nothing is created.
    """
    entry = await db.get(StudyListEntry, (user_id, resource_id))
    if entry is None:
        return Outcome(Status.NOT_FOUND, "There was no study list entry to update")

    entry.studied = studied
    await db.flush()
    return Outcome(
        Status.SUCCESS,
        "Updated the studied status of a resource in a user's study list",
        _entry_to_dict(entry),
    )


async def remove_entry(db: AsyncSession, user_id: int, resource_id: int) -> Outcome:
    """Delete the pair's entry; returns ``not found`` without deleting anything."""
    entry = await db.get(StudyListEntry, (user_id, resource_id))
    if entry is None:
        return Outcome(Status.NOT_FOUND, "There was no resource to delete")

    data = _entry_to_dict(entry)
    await db.delete(entry)
    await db.flush()
    logger.info("User %s removed resource %s from their study list", user_id, resource_id)
    return Outcome(Status.SUCCESS, "Deleted a resource from study list", data)
