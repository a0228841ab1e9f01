from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.database import get_db
from studyhub.responses import envelope, from_outcome, not_found
from studyhub.schemas import CommentCreate, ResourceCreate, ResourceUpdate, TagAssociate, VoteCast
from studyhub.services import comment_service, resource_service, study_list_service, tag_service, vote_service
from studyhub.services.outcomes import Status

router = APIRouter(prefix="/api/v1/resources", tags=["resources"])

@router.get("")
async def list_resources(db: AsyncSession = Depends(get_db)):
    resources = await resource_service.list_resources(db)
    return envelope(Status.SUCCESS, "Retrieved all resources", resources)

@router.post("")
async def create_resource(data: ResourceCreate, db: AsyncSession = Depends(get_db)):
    outcome = await resource_service.create_resource(db, data)
    return from_outcome(outcome, success_code=201)

@router.get("/{resource_id}")
async def get_resource(resource_id: int, db: AsyncSession = Depends(get_db)):
    resource = await resource_service.get_resource(db, resource_id)
    if resource is None:
        return not_found(f"No resource with id {resource_id}")
    return envelope(Status.SUCCESS, "Retrieved one resource", resource)

@router.put("/{resource_id}")
async def update_resource(resource_id: int, data: ResourceUpdate, db: AsyncSession = Depends(get_db)):
    return from_outcome(await resource_service.update_resource(db, resource_id, data))

@router.delete("/{resource_id}")
async def delete_resource(resource_id: int, db: AsyncSession = Depends(get_db)):
    return from_outcome(await resource_service.delete_resource(db, resource_id))

# ---------------------------------------------------------------------------
# Tags of a resource
# ---------------------------------------------------------------------------

@router.get("/{resource_id}/tags")
async def get_resource_tags(resource_id: int, db: AsyncSession = Depends(get_db)):
    tags = await tag_service.get_resource_tags(db, resource_id)
    return envelope(Status.SUCCESS, "Retrieved all tags for a single resource", tags)

@router.post("/{resource_id}/tags")
async def associate_tags(resource_id: int, data: TagAssociate, db: AsyncSession = Depends(get_db)):
    outcome = await tag_service.associate_tags(db, resource_id, data.tag_ids)
    return from_outcome(outcome, success_code=201)

# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------

@router.get("/{resource_id}/comments")
async def list_comments(resource_id: int, db: AsyncSession = Depends(get_db)):
    comments = await comment_service.list_for_resource(db, resource_id)
    return envelope(Status.SUCCESS, "Retrieved all comments for a single resource", comments)

@router.post("/{resource_id}/comments")
async def add_comment(resource_id: int, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    comment = await comment_service.add_comment(db, resource_id, data)
    if comment is None:
        return not_found(f"No resource with id {resource_id}")
    return envelope(Status.SUCCESS, f"Added a new comment to resource with id {resource_id}", comment, 201)

# ---------------------------------------------------------------------------
# Votes
# ---------------------------------------------------------------------------

@router.get("/{resource_id}/likes/{author_id}")
async def get_vote_status(resource_id: int, author_id: int, db: AsyncSession = Depends(get_db)):
    liked = await vote_service.get_vote_status(db, resource_id, author_id)
    if liked is None:
        return not_found(f"User {author_id} has not voted on resource {resource_id}")
    return envelope(
        Status.SUCCESS,
        f"Got like/dislike status for user {author_id} of resource {resource_id}",
        liked,
    )

@router.post("/{resource_id}/likes/{author_id}")
async def cast_vote(resource_id: int, author_id: int, data: VoteCast, db: AsyncSession = Depends(get_db)):
    outcome = await vote_service.cast_vote(db, resource_id, author_id, data.liked)
    return from_outcome(outcome, success_code=201)

@router.delete("/{resource_id}/likes/{author_id}")
async def remove_vote(resource_id: int, author_id: int, db: AsyncSession = Depends(get_db)):
    removed = await vote_service.remove_vote(db, resource_id, author_id)
    if removed is None:
        return not_found(f"User {author_id} has not voted on resource {resource_id}")
    return envelope(
        Status.SUCCESS,
        f"User {author_id} removed their vote on resource {resource_id}",
        removed,
    )

# ---------------------------------------------------------------------------
# Study list status
# ---------------------------------------------------------------------------

@router.get("/{resource_id}/study_list/{user_id}")
async def get_study_list_status(resource_id: int, user_id: int, db: AsyncSession = Depends(get_db)):
    listed = await study_list_service.get_status(db, user_id, resource_id)
    return envelope(
        Status.SUCCESS,
        f"Got study list status for user {user_id} of resource {resource_id}",
        listed,
    )
