# blog_api/schemas/post.py
"""
Pydantic schemas for posts and their embedded comments.
"""
from typing import Optional

from pydantic import BaseModel, constr


class PostIn(BaseModel):
    """
    Request model for creating a post.
    Unknown keys (including "comments") are ignored: comments only change
    through the comment endpoints.
    """
    title: constr(strip_whitespace=True, min_length=5, max_length=256)
    content: constr(strip_whitespace=True, min_length=10)
    author: constr(strip_whitespace=True, min_length=3, max_length=128)
    description: Optional[str] = None
    readTime: Optional[constr(strip_whitespace=True, max_length=32)] = None  # e.g. "3 min"
    isActive: bool = True


class PostUpdateIn(BaseModel):
    """
    Request model for PUT /posts/{id}.
    Optional fields left out keep their stored value.
    """
    title: constr(strip_whitespace=True, min_length=5, max_length=256)
    content: constr(strip_whitespace=True, min_length=10)
    author: constr(strip_whitespace=True, min_length=3, max_length=128)
    description: Optional[str] = None
    readTime: Optional[constr(strip_whitespace=True, max_length=32)] = None  # e.g. "3 min"
    isActive: Optional[bool] = None


class CommentIn(BaseModel):
    """Body of the add/update comment endpoints; author and role come from the token."""
    comment: constr(strip_whitespace=True, min_length=1)


class Comment(BaseModel):
    """A comment as stored inside its post."""
    id: str
    author: str  # Display name of the principal who wrote it
    role: str    # Role of that principal at creation time
    comment: str
    createdAt: str  # ISO timestamp
