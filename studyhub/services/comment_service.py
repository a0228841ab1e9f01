"""
Comment service — append-only comments on resources.

Comments cannot be edited or deleted through the API; they only go
away with their resource.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.models import Comment, Resource, User
from studyhub.schemas import CommentCreate


def _comment_to_dict(comment: Comment) -> dict:
    return {
        "comment_id": comment.comment_id,
        "resource_id": comment.resource_id,
        "author_id": comment.author_id,
        "comment_text": comment.comment_text,
        "date_added": comment.date_added.isoformat() if comment.date_added else None,
    }


async def list_for_resource(db: AsyncSession, resource_id: int) -> list[dict]:
    """Return the resource's comments with the commenter's name, newest first."""
    q = (
        select(Comment, User.name)
        .join(User, User.id == Comment.author_id)
        .where(Comment.resource_id == resource_id)
        .order_by(Comment.date_added.desc(), Comment.comment_id.desc())
    )
    comments = []
    for comment, name in (await db.execute(q)).all():
        data = _comment_to_dict(comment)
        data["name"] = name
        comments.append(data)
    return comments


async def add_comment(
    db: AsyncSession,
    resource_id: int,
    data: CommentCreate,
) -> dict | None:
    """
    Append a comment to the resource identified by *resource_id*.

    Returns the serialised comment, or None when the resource does not
    exist.
    """
    if await db.get(Resource, resource_id) is None:
        return None

    comment = Comment(
        resource_id=resource_id,
        author_id=data.author_id,
        comment_text=data.comment_text,
    )
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    return _comment_to_dict(comment)
