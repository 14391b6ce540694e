"""Service-level helpers for posts, comments, replies and hidden posts."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import desc, select
from sqlalchemy.orm import Session, selectinload

from quadboard.models import (
    Comment,
    HiddenPost,
    NotificationType,
    Post,
    Reply,
)
from quadboard.models.post import DEFAULT_SUBJECT_TAG
from quadboard.services.errors import (
    CommentNotFoundError,
    NotContentAuthorError,
    PostNotFoundError,
)
from quadboard.services.notifications import MESSAGES, add_notification
from quadboard.services.users import ensure_user

logger = logging.getLogger(__name__)

__all__ = [
    "add_comment",
    "add_reply",
    "create_post",
    "delete_post",
    "get_post",
    "hide_post",
    "list_comments",
    "list_feed",
    "list_hidden_post_ids",
    "list_user_posts",
    "toggle_pin",
    "update_post_text",
]


def get_post(db: Session, post_id: int) -> Post:
    """Return a post or raise `PostNotFoundError`."""
    post = db.get(Post, post_id)
    if post is None:
        raise PostNotFoundError(f"Post {post_id} not found")
    return post


def _require_author(post: Post, user_id: str) -> None:
    if post.author_id != user_id:
        raise NotContentAuthorError(f"Only the author may change post {post.id}")


def create_post(db: Session, text: str, author_id: str, subject_tag: str | None = None) -> Post:
    """Persist a new post with zeroed counters and an empty voter registry."""
    tag = (subject_tag or "").strip() or DEFAULT_SUBJECT_TAG
    post = Post(
        text=text,
        author_id=author_id,
        subject_tag=tag,
        is_pinned=False,
        upvotes=0,
        downvotes=0,
        comments_count=0,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Post %s created with subject tag %s", post.id, tag)
    return post


def list_hidden_post_ids(db: Session, user_id: str) -> set[int]:
    """Return the ids of posts the user has hidden."""
    rows = db.execute(select(HiddenPost.post_id).where(HiddenPost.user_id == user_id))
    return set(rows.scalars())


def list_feed(db: Session, user_id: str, *, limit: int = 100) -> Sequence[Post]:
    """Return the board for a user: pinned first, then newest, hidden posts excluded."""
    hidden = select(HiddenPost.post_id).where(HiddenPost.user_id == user_id)
    return (
        db.query(Post)
        .filter(Post.id.not_in(hidden))
        .order_by(desc(Post.is_pinned), desc(Post.created_at), desc(Post.id))
        .limit(limit)
        .all()
    )


def list_user_posts(db: Session, user_id: str) -> Sequence[Post]:
    """Return posts authored by a user, newest first."""
    return (
        db.query(Post)
        .filter(Post.author_id == user_id)
        .order_by(desc(Post.created_at), desc(Post.id))
        .all()
    )


def update_post_text(db: Session, post_id: int, user_id: str, text: str) -> Post:
    """Replace a post's text (author only)."""
    post = get_post(db, post_id)
    _require_author(post, user_id)
    post.text = text
    db.commit()
    logger.info("Post %s text updated", post_id)
    return post


def toggle_pin(db: Session, post_id: int, user_id: str) -> Post:
    """Flip a post's pinned flag (author only)."""
    post = get_post(db, post_id)
    _require_author(post, user_id)
    post.is_pinned = not post.is_pinned
    db.commit()
    logger.info("Post %s pinned=%s", post_id, post.is_pinned)
    return post


def delete_post(db: Session, post_id: int, user_id: str) -> None:
    """Permanently delete a post with its comments and votes (author only)."""
    post = get_post(db, post_id)
    _require_author(post, user_id)
    db.delete(post)
    db.commit()
    logger.info("Post %s deleted by its author", post_id)


def hide_post(db: Session, user_id: str, post_id: int) -> None:
    """Hide a post from the user's feed; hiding twice is harmless."""
    get_post(db, post_id)
    ensure_user(db, user_id)
    if db.get(HiddenPost, (user_id, post_id)) is None:
        db.add(HiddenPost(user_id=user_id, post_id=post_id))
        db.commit()
        logger.info("Post %s hidden for user %s", post_id, user_id)


def add_comment(db: Session, post_id: int, text: str, author_id: str) -> Comment:
    """Comment on a post, bump its comment count and notify its author."""
    post = db.execute(
        select(Post).where(Post.id == post_id).with_for_update()
    ).scalar_one_or_none()
    if post is None:
        raise PostNotFoundError(f"Post {post_id} not found")

    comment = Comment(post_id=post_id, text=text, author_id=author_id)
    db.add(comment)
    post.comments_count += 1

    if post.author_id != author_id:
        add_notification(
            db,
            post.author_id,
            NotificationType.COMMENT,
            MESSAGES[NotificationType.COMMENT],
        )

    db.commit()
    db.refresh(comment)
    logger.info("Comment %s added to post %s", comment.id, post_id)
    return comment


def list_comments(db: Session, post_id: int) -> Sequence[Comment]:
    """Return a post's comments oldest first, replies eagerly loaded."""
    get_post(db, post_id)
    return (
        db.query(Comment)
        .options(selectinload(Comment.replies))
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )


def add_reply(db: Session, post_id: int, comment_id: int, text: str, author_id: str) -> Reply:
    """Append a reply to a comment of the given post."""
    comment = db.get(Comment, comment_id)
    if comment is None or comment.post_id != post_id:
        raise CommentNotFoundError(f"Comment {comment_id} does not exist on post {post_id}")

    reply = Reply(comment_id=comment_id, text=text, author_id=author_id)
    db.add(reply)
    db.commit()
    db.refresh(reply)
    return reply
