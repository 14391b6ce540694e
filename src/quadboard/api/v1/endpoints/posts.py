# src/quadboard/api/v1/endpoints/posts.py
"""Post, comment and reply endpoints for the Quadboard API."""

from fastapi import APIRouter, Query, Response, status

from quadboard.api.v1.dependencies import (
    ActiveUserDep,
    CurrentUserDep,
    SessionDep,
    VerifiedUserDep,
    http_error,
)
from quadboard.models import Comment, Post, Reply
from quadboard.schemas.post import (
    CommentCreate,
    CommentResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    ReplyResponse,
)
from quadboard.services import posts as post_service
from quadboard.services.errors import QuadboardError

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
async def list_posts(
    current_user: CurrentUserDep,
    db: SessionDep,
    limit: int = Query(100, ge=1, le=200, description="Maximum number of posts to return"),
) -> list[Post]:
    """List the board, pinned posts first, without the caller's hidden posts."""
    return list(post_service.list_feed(db, current_user.id, limit=limit))


@router.get("/mine", response_model=list[PostResponse])
async def list_my_posts(current_user: CurrentUserDep, db: SessionDep) -> list[Post]:
    """List posts authored by the caller."""
    return list(post_service.list_user_posts(db, current_user.id))


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Post:
    """Create a new anonymous post."""
    return post_service.create_post(
        db,
        text=post_data.text,
        author_id=current_user.id,
        subject_tag=post_data.subject_tag,
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, _current_user: CurrentUserDep, db: SessionDep) -> Post:
    """Get a specific post by ID."""
    try:
        return post_service.get_post(db, post_id)
    except QuadboardError as err:
        raise http_error(err) from err


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    update_data: PostUpdate,
    current_user: VerifiedUserDep,
    db: SessionDep,
) -> Post:
    """Edit the text of one of the caller's posts."""
    try:
        return post_service.update_post_text(db, post_id, current_user.id, update_data.text)
    except QuadboardError as err:
        raise http_error(err) from err


@router.post("/{post_id}/pin", response_model=PostResponse)
async def toggle_pin(post_id: int, current_user: VerifiedUserDep, db: SessionDep) -> Post:
    """Pin or unpin one of the caller's posts."""
    try:
        return post_service.toggle_pin(db, post_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_post(post_id: int, current_user: VerifiedUserDep, db: SessionDep) -> Response:
    """Permanently delete one of the caller's posts."""
    try:
        post_service.delete_post(db, post_id, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/hide", status_code=status.HTTP_200_OK)
async def hide_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> dict[str, str]:
    """Hide a post from the caller's board."""
    try:
        post_service.hide_post(db, current_user.id, post_id)
    except QuadboardError as err:
        raise http_error(err) from err
    return {"status": "hidden"}


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(post_id: int, _current_user: CurrentUserDep, db: SessionDep) -> list[Comment]:
    """List a post's comments, oldest first, with their replies."""
    try:
        return list(post_service.list_comments(db, post_id))
    except QuadboardError as err:
        raise http_error(err) from err


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    post_id: int,
    comment_data: CommentCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Comment:
    """Comment on a post."""
    try:
        return post_service.add_comment(db, post_id, comment_data.text, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err


@router.post(
    "/{post_id}/comments/{comment_id}/replies",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_reply(
    post_id: int,
    comment_id: int,
    reply_data: CommentCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> Reply:
    """Reply to a comment."""
    try:
        return post_service.add_reply(db, post_id, comment_id, reply_data.text, current_user.id)
    except QuadboardError as err:
        raise http_error(err) from err
