"""
In-memory mutations of a post document.

Each function takes the post as a plain dict (as read from Firestore), checks
its precondition, and returns only the fields that changed, ready to be
passed to ``update``. A failed precondition raises an ApiError and leaves the
post untouched.
"""
import html
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import bleach

from models.user import User
from services.errors import AlreadyLiked, CommentNotFound, NotAuthorized, NotLiked


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def sanitize(text: Optional[str]) -> Optional[str]:
    """Strip every tag from ``text`` and return it as plain, unescaped text"""
    if text is None:
        return None
    return html.unescape(bleach.clean(text, tags=set(), strip=True)).strip()



def new_post(user: User, text: str) -> Dict[str, Any]:
    """Build a fresh post document authored by ``user``. ``text`` must already be sanitized"""
    return {
        "user": user.user_id,
        "text": text,
        "name": user.name,
        "avatar": user.avatar,
        "date": utc_now(),
        "likes": [],
        "comments": [],
    }


def _index_of(items: List[Dict[str, Any]], key: str, value: str) -> int:
    for index, item in enumerate(items):
        if item.get(key) == value:
            return index
    return -1


def has_liked(post: Dict[str, Any], user_id: str) -> bool:
    return _index_of(post.get("likes", []), "user", user_id) >= 0


def like(post: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Prepend a like by ``user_id``. Raises AlreadyLiked if one exists"""
    if has_liked(post, user_id):
        raise AlreadyLiked()

    likes = [{"user": user_id, "date": utc_now()}] + list(post.get("likes", []))
    return {"likes": likes}


def unlike(post: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    """Remove the first like by ``user_id``. Raises NotLiked if there is none"""
    likes = list(post.get("likes", []))
    index = _index_of(likes, "user", user_id)
    if index < 0:
        raise NotLiked()

    likes.pop(index)
    return {"likes": likes}


def add_comment(post: Dict[str, Any], user: User, text: str) -> Dict[str, Any]:
    """Prepend a comment of sanitized ``text``; identity fields come from the authenticated user"""
    comment = {
        "id": uuid.uuid4().hex,
        "user": user.user_id,
        "text": text,
        "name": user.name,
        "avatar": user.avatar,
        "date": utc_now(),
    }
    comments = [comment] + list(post.get("comments", []))
    return {"comments": comments}


def remove_comment(post: Dict[str, Any], comment_id: str, user_id: str) -> Dict[str, Any]:
    """
    Remove the first comment with ``comment_id``

    Only the comment's author or the post's author may remove it.
    """
    comments = list(post.get("comments", []))
    index = _index_of(comments, "id", comment_id)
    if index < 0:
        raise CommentNotFound()

    if user_id not in (comments[index].get("user"), post.get("user")):
        raise NotAuthorized()

    comments.pop(index)
    return {"comments": comments}


def check_owner(post: Dict[str, Any], user_id: str) -> None:
    if post.get("user") != user_id:
        raise NotAuthorized()
