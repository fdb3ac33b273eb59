# blog_api/models/post.py
"""
Database model for posts.
A post owns its comments: they are stored as an ordered JSON array on the
post row and have no table of their own.
"""
import uuid
from tortoise import fields, models


class Post(models.Model):
    """
    Post database model.

    - author: free-text display name, not a foreign key
    - is_active: inactive posts are visible to professors only
    - comments: ordered list of {id, author, role, comment, createdAt}
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    title = fields.CharField(max_length=256)
    content = fields.TextField()
    author = fields.CharField(max_length=128)
    description = fields.TextField(null=True)
    read_time = fields.CharField(max_length=32, null=True)  # e.g. "3 min"
    is_active = fields.BooleanField(default=True)
    comments = fields.JSONField(default=list)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "posts"
        ordering = ["-created_at"]

    def to_public(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "description": self.description,
            "readTime": self.read_time,
            "isActive": self.is_active,
            "comments": list(self.comments or []),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
