import logging
from typing import Dict, List

from fastapi import APIRouter
from google.api_core.exceptions import GoogleAPICallError

from dependencies import Firestore, CurrentUser
from models.post import Post, PostRequest
from services.errors import NoPostFound, NoPostsFound, ValidationFailed
from services.posts import sanitize
from services.validation import validate_post_input
from utils.logging import (
    EVENT_COMMENT_ADDED,
    EVENT_COMMENT_REMOVED,
    EVENT_DB_READ_FAILED,
    EVENT_POST_CREATED,
    EVENT_POST_DELETED,
    EVENT_POST_LIKED,
    EVENT_POST_UNLIKED,
    log_event,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[Post])
async def get_posts(db: Firestore):
    """Get all posts, newest first"""
    try:
        return db.get_all_posts()
    except GoogleAPICallError as e:
        log_event(logger, "error", EVENT_DB_READ_FAILED, operation="get_all_posts", detail=str(e))
        raise NoPostsFound()


@router.get("/{post_id}", response_model=Post)
async def get_post(db: Firestore, post_id: str):
    """Get a single post by ID"""
    try:
        post = db.get_post(post_id)
    except (GoogleAPICallError, ValueError) as e:
        # ValueError covers IDs the client library refuses to build a path from
        log_event(logger, "warning", EVENT_DB_READ_FAILED, operation="get_post", post_id=post_id, detail=str(e))
        raise NoPostFound()

    if post is None:
        raise NoPostFound()
    return post


@router.post("", response_model=Post)
async def create_post(db: Firestore, post_data: PostRequest, current_user: CurrentUser):
    """Create a new post authored by the caller"""
    # length rules apply to the text as it will be stored
    post_data.text = sanitize(post_data.text)
    errors, is_valid = validate_post_input(post_data)
    if not is_valid:
        raise ValidationFailed(errors)

    post = db.create_post(current_user, post_data.text)
    log_event(logger, "info", EVENT_POST_CREATED,
              post_id=post["id"], user_id=current_user.user_id, text_length=len(post["text"]))
    return post


@router.post("/like/{post_id}", response_model=Post)
async def like_post(db: Firestore, post_id: str, current_user: CurrentUser):
    """Like a post. A user can like a given post once"""
    post = db.like_post(post_id, current_user.user_id)
    log_event(logger, "info", EVENT_POST_LIKED,
              post_id=post_id, user_id=current_user.user_id, likes=len(post["likes"]))
    return post


@router.post("/unlike/{post_id}", response_model=Post)
async def unlike_post(db: Firestore, post_id: str, current_user: CurrentUser):
    """Withdraw the caller's like from a post"""
    post = db.unlike_post(post_id, current_user.user_id)
    log_event(logger, "info", EVENT_POST_UNLIKED,
              post_id=post_id, user_id=current_user.user_id, likes=len(post["likes"]))
    return post


@router.post("/comment/{post_id}", response_model=Post)
async def add_comment(db: Firestore, post_id: str, comment: PostRequest, current_user: CurrentUser):
    """
    Add a comment to a post

    The comment's author, name and avatar are those of the authenticated
    caller; name and avatar sent in the body are ignored.
    """
    comment.text = sanitize(comment.text)
    errors, is_valid = validate_post_input(comment)
    if not is_valid:
        raise ValidationFailed(errors)

    post = db.add_comment(post_id, current_user, comment.text)
    log_event(logger, "info", EVENT_COMMENT_ADDED,
              post_id=post_id, comment_id=post["comments"][0]["id"], user_id=current_user.user_id)
    return post


@router.delete("/comment/{post_id}/{comment_id}", response_model=Post)
async def remove_comment(db: Firestore, post_id: str, comment_id: str, current_user: CurrentUser):
    """Remove a comment. Allowed for the comment's author and the post's author"""
    post = db.remove_comment(post_id, comment_id, current_user.user_id)
    log_event(logger, "info", EVENT_COMMENT_REMOVED,
              post_id=post_id, comment_id=comment_id, user_id=current_user.user_id)
    return post


@router.delete("/{post_id}")
async def delete_post(db: Firestore, post_id: str, current_user: CurrentUser) -> Dict[str, bool]:
    """Delete a post. Only its author may do so"""
    db.delete_post(post_id, current_user.user_id)
    log_event(logger, "info", EVENT_POST_DELETED, post_id=post_id, user_id=current_user.user_id)
    return {"success": True}
