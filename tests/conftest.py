import copy
import itertools
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_firestore
from main import app
from models.profile import EducationRequest, ProfileRequest
from models.user import User
from services import posts, profiles
from services.errors import HandleTaken, PostNotFound, ProfileNotFound

ALICE = User(user_id="alice-uid", email="alice@example.com", name="Alice", avatar="https://img.example.com/alice.png")
BOB = User(user_id="bob-uid", email="bob@example.com", name="Bob", avatar="https://img.example.com/bob.png")


class InMemoryDB:
    """Dict-backed stand-in for FirestoreDB running the same document mutations"""

    def __init__(self):
        self.posts: Dict[str, Dict[str, Any]] = {}
        self.profiles: Dict[str, Dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def _mutate(self, store, doc_id, mutate, not_found):
        if doc_id not in store:
            raise not_found()
        document = copy.deepcopy(store[doc_id])
        document.update(mutate(copy.deepcopy(document)))
        store[doc_id] = document
        return copy.deepcopy(document)

    def get_all_posts(self) -> List[Dict[str, Any]]:
        ordered = sorted(self.posts.values(), key=lambda post: post["date"], reverse=True)
        return copy.deepcopy(ordered)

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        post = self.posts.get(post_id)
        return copy.deepcopy(post) if post else None

    def insert_post(self, **fields) -> Dict[str, Any]:
        post_id = f"post{next(self._ids)}"
        post = {"id": post_id, "likes": [], "comments": [], "name": "", "avatar": None, **fields}
        self.posts[post_id] = post
        return copy.deepcopy(post)

    def create_post(self, user: User, text: str) -> Dict[str, Any]:
        return self.insert_post(**posts.new_post(user, text))

    def like_post(self, post_id: str, user_id: str):
        return self._mutate(self.posts, post_id, lambda post: posts.like(post, user_id), PostNotFound)

    def unlike_post(self, post_id: str, user_id: str):
        return self._mutate(self.posts, post_id, lambda post: posts.unlike(post, user_id), PostNotFound)

    def add_comment(self, post_id: str, user: User, text: str):
        return self._mutate(self.posts, post_id, lambda post: posts.add_comment(post, user, text), PostNotFound)

    def remove_comment(self, post_id: str, comment_id: str, user_id: str):
        return self._mutate(
            self.posts, post_id,
            lambda post: posts.remove_comment(post, comment_id, user_id),
            PostNotFound
        )

    def delete_post(self, post_id: str, user_id: str) -> None:
        if post_id not in self.posts:
            raise PostNotFound()
        posts.check_owner(self.posts[post_id], user_id)
        del self.posts[post_id]

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        profile = self.profiles.get(user_id)
        return copy.deepcopy(profile) if profile else None

    def save_profile(self, user: User, data: ProfileRequest) -> Dict[str, Any]:
        handle = data.handle.strip()
        if any(p["handle"] == handle and uid != user.user_id for uid, p in self.profiles.items()):
            raise HandleTaken()
        if user.user_id in self.profiles:
            self.profiles[user.user_id].update(profiles.profile_fields(user, data))
        else:
            self.profiles[user.user_id] = {"id": user.user_id, **profiles.new_profile(user, data)}
        return copy.deepcopy(self.profiles[user.user_id])

    def add_education(self, user_id: str, data: EducationRequest):
        return self._mutate(
            self.profiles, user_id,
            lambda profile: profiles.add_education(profile, data),
            ProfileNotFound
        )

    def remove_education(self, user_id: str, edu_id: str):
        return self._mutate(
            self.profiles, user_id,
            lambda profile: profiles.remove_education(profile, edu_id),
            ProfileNotFound
        )


@pytest.fixture()
def db() -> InMemoryDB:
    return InMemoryDB()


@pytest.fixture()
def client(db: InMemoryDB):
    app.dependency_overrides[get_firestore] = lambda: db
    app.dependency_overrides[get_current_user] = lambda: ALICE
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def login():
    """Switch the authenticated caller for subsequent requests"""
    def _login(user: User) -> None:
        app.dependency_overrides[get_current_user] = lambda: user
    return _login
