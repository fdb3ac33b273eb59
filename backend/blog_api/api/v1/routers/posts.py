# blog_api/api/v1/routers/posts.py
from fastapi import APIRouter, Depends, Query, status
from tortoise.expressions import Q

from blog_api.api.v1.deps import (
    get_current_principal,
    is_professor,
    parse_id,
    require_professor_for_posts,
    require_search_access,
)
from blog_api.core.errors import NotFound, store_errors
from blog_api.models.post import Post
from blog_api.schemas.auth import CurrentPrincipal
from blog_api.schemas.post import CommentIn, PostIn, PostUpdateIn
from blog_api.services import comments as comment_rules

router = APIRouter(prefix="/posts", tags=["posts"])

POST_NOT_FOUND = "Post não encontrado."


def _visible_posts(principal: CurrentPrincipal):
    """Professors see every post, everyone else only active ones."""
    qs = Post.all()
    if not is_professor(principal):
        qs = qs.filter(is_active=True)
    return qs.order_by("-created_at")


async def _get_post(post_id: str, principal: CurrentPrincipal | None = None) -> Post:
    """
    Fetch a post by id, or raise NotFound.

    With a principal the visibility rule applies: an inactive post does not
    exist for a non-professor.
    """
    pk = parse_id(post_id)
    if pk is None:
        raise NotFound(POST_NOT_FOUND)
    qs = Post.filter(id=pk) if principal is None else _visible_posts(principal).filter(id=pk)
    with store_errors("Erro ao buscar post."):
        post = await qs.first()
    if post is None:
        raise NotFound(POST_NOT_FOUND)
    return post


# ===== Posts =====
@router.get("")
async def list_posts(principal: CurrentPrincipal = Depends(get_current_principal)):
    """
    List posts, newest first.

    Professors get every post; other roles only get active posts.
    """
    with store_errors("Erro ao buscar posts."):
        rows = await _visible_posts(principal)
    return [p.to_public() for p in rows]


@router.get("/search")
async def search_posts(
    q: str = Query(..., min_length=1, description="Case-insensitive text to look for"),
    principal: CurrentPrincipal = Depends(require_search_access),
):
    """
    Case-insensitive substring search on title, content and description.

    Open to professors and alunos; results follow the same visibility rule
    as the list endpoint.
    """
    term = q.strip()
    with store_errors("Erro na busca."):
        rows = await _visible_posts(principal).filter(
            Q(title__icontains=term) | Q(content__icontains=term) | Q(description__icontains=term)
        )
    return [p.to_public() for p in rows]


@router.get("/{post_id}")
async def get_post(post_id: str, principal: CurrentPrincipal = Depends(get_current_principal)):
    post = await _get_post(post_id, principal)
    return post.to_public()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(body: PostIn, principal: CurrentPrincipal = Depends(require_professor_for_posts)):
    """
    Create a post (professors only, 401 otherwise).

    A new post always starts without comments.
    """
    with store_errors("Erro ao criar post."):
        post = await Post.create(
            title=body.title,
            content=body.content,
            author=body.author,
            description=body.description,
            read_time=body.readTime,
            is_active=body.isActive,
            comments=[],
        )
    return post.to_public()


@router.put("/{post_id}")
async def update_post(
    post_id: str,
    body: PostUpdateIn,
    principal: CurrentPrincipal = Depends(require_professor_for_posts),
):
    """
    Update a post's own fields (professors only, 401 otherwise).

    The embedded comments are never written here, even when the payload
    carries a "comments" array.
    """
    post = await _get_post(post_id)
    post.title = body.title
    post.content = body.content
    post.author = body.author
    if body.description is not None:
        post.description = body.description
    if body.readTime is not None:
        post.read_time = body.readTime
    if body.isActive is not None:
        post.is_active = body.isActive
    with store_errors("Erro ao atualizar post."):
        await post.save(update_fields=["title", "content", "author", "description", "read_time", "is_active", "updated_at"])
    return post.to_public()


@router.delete("/{post_id}")
async def delete_post(post_id: str, principal: CurrentPrincipal = Depends(require_professor_for_posts)):
    post = await _get_post(post_id)
    with store_errors("Erro ao deletar post."):
        await post.delete()
    return {"message": "Post excluído com sucesso."}


# ===== Comments =====
@router.post("/{post_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: str,
    body: CommentIn,
    principal: CurrentPrincipal = Depends(get_current_principal),
):
    """Append a comment authored by the caller; returns the updated post."""
    post = await _get_post(post_id, principal)
    comments = comment_rules.load_comments(post.comments)
    post.comments = comment_rules.dump_comments(comment_rules.add_comment(comments, principal, body.comment))
    with store_errors("Erro ao adicionar comentário."):
        await post.save()
    return post.to_public()


@router.put("/{post_id}/comments/{comment_id}")
async def update_comment(
    post_id: str,
    comment_id: str,
    body: CommentIn,
    principal: CurrentPrincipal = Depends(get_current_principal),
):
    """Change the text of a comment; only its own author (same name and role) may do it."""
    post = await _get_post(post_id, principal)
    comments = comment_rules.load_comments(post.comments)
    updated = comment_rules.update_comment(comments, comment_id, principal, body.comment)
    post.comments = comment_rules.dump_comments(updated)
    with store_errors("Erro ao atualizar comentário."):
        await post.save()
    return post.to_public()


@router.delete("/{post_id}/comments/{comment_id}")
async def delete_comment(
    post_id: str,
    comment_id: str,
    principal: CurrentPrincipal = Depends(get_current_principal),
):
    """
    Remove a comment.

    Allowed for the comment's own author, or for a professor when the comment
    was written by an aluno. Remaining comments keep their order.
    """
    post = await _get_post(post_id, principal)
    comments = comment_rules.load_comments(post.comments)
    remaining = comment_rules.delete_comment(comments, comment_id, principal)
    post.comments = comment_rules.dump_comments(remaining)
    with store_errors("Erro ao deletar comentário."):
        await post.save()
    return {"message": "Comentário deletado com sucesso.", "post": post.to_public()}
