# blog_api/services/comments.py
"""
Comment ownership rules.

Comments are values inside a post. Every operation takes the post's current
comment list and returns a new list; the caller persists the whole post.

Who may do what:
    - anyone authenticated may add a comment (author/role come from the token)
    - only the exact (author, role) that wrote a comment may edit it
    - a comment may be deleted by its own (author, role), or by a professor
      when the comment was written by an aluno
    - a professor can never delete another professor's comment
"""
import datetime as dt
import logging
import uuid
from typing import Iterable

from blog_api.core.errors import Forbidden, NotFound
from blog_api.models.principal import ALUNO, PROFESSOR
from blog_api.schemas.auth import CurrentPrincipal
from blog_api.schemas.post import Comment

logger = logging.getLogger("uvicorn.error")

COMMENT_NOT_FOUND = "Comentário não encontrado."
UPDATE_DENIED = "Você só pode atualizar seus próprios comentários."
DELETE_DENIED = "Você não tem permissão para deletar este comentário."


class CommentNotFound(NotFound):
    message = COMMENT_NOT_FOUND


def load_comments(raw: Iterable[dict] | None) -> list[Comment]:
    return [Comment.model_validate(item) for item in (raw or [])]


def dump_comments(comments: Iterable[Comment]) -> list[dict]:
    return [c.model_dump() for c in comments]


def is_author(comment: Comment, actor: CurrentPrincipal) -> bool:
    return comment.author == actor.name and comment.role == actor.role


def can_update(comment: Comment, actor: CurrentPrincipal) -> bool:
    # No professor override for edits
    return is_author(comment, actor)


def can_delete(comment: Comment, actor: CurrentPrincipal) -> bool:
    if is_author(comment, actor):
        return True
    if actor.role == PROFESSOR and comment.role == ALUNO:
        return True
    return False


def _index_of(comments: list[Comment], comment_id: str) -> int:
    for i, c in enumerate(comments):
        if c.id == comment_id:
            return i
    raise CommentNotFound()


def add_comment(comments: list[Comment], actor: CurrentPrincipal, text: str) -> list[Comment]:
    new = Comment(
        id=uuid.uuid4().hex,
        author=actor.name,
        role=actor.role,
        comment=text,
        createdAt=dt.datetime.now(dt.timezone.utc).isoformat(),
    )
    return [*comments, new]


def update_comment(
    comments: list[Comment], comment_id: str, actor: CurrentPrincipal, text: str
) -> list[Comment]:
    idx = _index_of(comments, comment_id)
    current = comments[idx]
    if not can_update(current, actor):
        logger.info("[comments] update denied: comment=%s actor=%s/%s", comment_id, actor.id, actor.role)
        raise Forbidden(UPDATE_DENIED)
    updated = current.model_copy(update={"comment": text})
    return [*comments[:idx], updated, *comments[idx + 1:]]


def delete_comment(comments: list[Comment], comment_id: str, actor: CurrentPrincipal) -> list[Comment]:
    idx = _index_of(comments, comment_id)
    if not can_delete(comments[idx], actor):
        logger.info("[comments] delete denied: comment=%s actor=%s/%s", comment_id, actor.id, actor.role)
        raise Forbidden(DELETE_DENIED)
    return [*comments[:idx], *comments[idx + 1:]]
