from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# --- Envelope ---

class Envelope(BaseModel):
    status: str
    message: str
    data: Any = None


# --- User ---

class UserResponse(BaseModel):
    id: int
    name: str
    is_faculty: bool
    model_config = ConfigDict(from_attributes=True)


# --- Tag ---

class TagCreate(BaseModel):
    tag_name: str = Field(min_length=1, max_length=100)
    tag_colour: str | None = Field(None, max_length=50)


class TagBatchCreate(BaseModel):
    tags: list[TagCreate] = Field(min_length=1)


class TagAssociate(BaseModel):
    tag_ids: list[int] = Field(min_length=1)


class TagResponse(BaseModel):
    tag_id: int
    tag_name: str
    tag_colour: str | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Resource ---

class ResourceCreate(BaseModel):
    author_id: int
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    type: str | None = Field(None, max_length=100)
    recommended: str | None = None
    url: str = Field(min_length=1, max_length=2048)
    week: str | None = Field(None, max_length=50)


class ResourceUpdate(BaseModel):
    """Full replacement of the editable resource fields."""
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    recommended: str | None = None
    url: str = Field(min_length=1, max_length=2048)


# --- Comment ---

class CommentCreate(BaseModel):
    author_id: int
    comment_text: str = Field(min_length=1)


# --- Vote ---

class VoteCast(BaseModel):
    liked: bool


# --- Study list ---

class StudyListAdd(BaseModel):
    resource_id: int


class StudyListUpdate(BaseModel):
    resource_id: int
    studied: bool


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_resources: int
    total_tags: int
    total_comments: int
    total_votes: int
    total_users: int
    cache_info: dict = {}
