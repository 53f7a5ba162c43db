from typing import Any, Callable, Dict, List, Optional, Type

import firebase_admin
from firebase_admin import firestore as fs
from google.api_core.exceptions import InvalidArgument
from google.cloud import firestore

from models.profile import EducationRequest, ProfileRequest
from models.user import User
from services import posts, profiles
from services.errors import ApiError, HandleTaken, PostNotFound, ProfileNotFound

POSTS = "posts"
PROFILES = "profiles"
# one document per claimed handle, keyed by the handle, holding its owner's uid
HANDLES = "handles"

Mutation = Callable[[Dict[str, Any]], Dict[str, Any]]


def to_document(snapshot) -> Dict[str, Any]:
    data = snapshot.to_dict()
    data["id"] = snapshot.id
    return data


class FirestoreDB:
    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def _document(self, collection: str, doc_id: str, not_found: Type[ApiError]):
        """Reference a document, treating an ID Firestore cannot address as missing"""
        try:
            return self.collection(collection).document(doc_id)
        except ValueError as e:
            raise not_found() from e

    @staticmethod
    def _read(doc_ref, transaction, not_found: Type[ApiError]):
        """Read a document inside ``transaction``; raise ``not_found`` if it is absent"""
        try:
            snapshot = doc_ref.get(transaction=transaction)
        except InvalidArgument as e:
            raise not_found() from e

        if not snapshot.exists:
            raise not_found()
        return snapshot

    def _mutate(self, collection: str, doc_id: str, mutate: Mutation,
                not_found: Type[ApiError]) -> Dict[str, Any]:
        """
        Read a document, apply ``mutate`` and write the changed fields back in one transaction

        Firestore reruns the transaction if the document changes underneath it,
        so concurrent mutations of the same array never overwrite each other.

        Args:
            collection: collection name
            doc_id: document ID
            mutate: returns the changed fields, or raises an ApiError to abort
            not_found: error raised when the document does not exist or the ID is malformed

        Returns:
            The document as stored after the update
        """
        doc_ref = self._document(collection, doc_id, not_found)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, doc_ref):
            snapshot = self._read(doc_ref, transaction, not_found)

            document = to_document(snapshot)
            changes = mutate(document)
            transaction.update(doc_ref, changes)
            document.update(changes)
            return document

        return update_in_transaction(transaction, doc_ref)

    # Posts

    def get_all_posts(self) -> List[Dict[str, Any]]:
        """Get all posts sorted by creation date descending"""
        posts_ref = self.collection(POSTS).order_by("date", direction=firestore.Query.DESCENDING).stream()
        return [to_document(doc) for doc in posts_ref]

    def get_post(self, post_id: str) -> Optional[Dict[str, Any]]:
        """Get a post by ID"""
        snapshot = self.collection(POSTS).document(post_id).get()
        if not snapshot.exists:
            return None
        return to_document(snapshot)

    def create_post(self, user: User, text: str) -> Dict[str, Any]:
        """Create a new post and return it with its generated ID"""
        new_post_ref = self.collection(POSTS).document()
        new_post_data = posts.new_post(user, text)
        new_post_ref.set(new_post_data)
        return {"id": new_post_ref.id, **new_post_data}

    def like_post(self, post_id: str, user_id: str) -> Dict[str, Any]:
        return self._mutate(POSTS, post_id, lambda post: posts.like(post, user_id), PostNotFound)

    def unlike_post(self, post_id: str, user_id: str) -> Dict[str, Any]:
        return self._mutate(POSTS, post_id, lambda post: posts.unlike(post, user_id), PostNotFound)

    def add_comment(self, post_id: str, user: User, text: str) -> Dict[str, Any]:
        return self._mutate(POSTS, post_id, lambda post: posts.add_comment(post, user, text), PostNotFound)

    def remove_comment(self, post_id: str, comment_id: str, user_id: str) -> Dict[str, Any]:
        return self._mutate(
            POSTS, post_id,
            lambda post: posts.remove_comment(post, comment_id, user_id),
            PostNotFound
        )

    def delete_post(self, post_id: str, user_id: str) -> None:
        """Delete a post, provided ``user_id`` is its author"""
        post_ref = self._document(POSTS, post_id, PostNotFound)
        transaction = self.db.transaction()

        @firestore.transactional
        def delete_in_transaction(transaction, post_ref):
            snapshot = self._read(post_ref, transaction, PostNotFound)

            posts.check_owner(snapshot.to_dict(), user_id)
            transaction.delete(post_ref)

        delete_in_transaction(transaction, post_ref)

    # Profiles, keyed by the owner's uid

    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        snapshot = self.collection(PROFILES).document(user_id).get()
        if not snapshot.exists:
            return None
        return to_document(snapshot)

    def save_profile(self, user: User, data: ProfileRequest) -> Dict[str, Any]:
        """
        Create the caller's profile, or update it if one exists

        The handle is claimed through a document in the handles collection in
        the same transaction as the profile write. Two users saving the same
        handle at once both read that document, so Firestore reruns one of
        them, which then sees the other's claim.

        Raises:
            HandleTaken: another user owns the handle
        """
        handle = data.handle.strip()
        profile_ref = self.collection(PROFILES).document(user.user_id)
        handle_ref = self.collection(HANDLES).document(handle)
        transaction = self.db.transaction()

        @firestore.transactional
        def save_in_transaction(transaction, profile_ref, handle_ref):
            claim = handle_ref.get(transaction=transaction)
            if claim.exists and claim.to_dict().get("user") != user.user_id:
                raise HandleTaken()

            snapshot = profile_ref.get(transaction=transaction)
            transaction.set(handle_ref, {"user": user.user_id})

            if snapshot.exists:
                profile = to_document(snapshot)
                previous = profile.get("handle")
                if previous and previous != handle:
                    transaction.delete(self.collection(HANDLES).document(previous))

                fields = profiles.profile_fields(user, data)
                transaction.update(profile_ref, fields)
                profile.update(fields)
                return profile

            profile_data = profiles.new_profile(user, data)
            transaction.set(profile_ref, profile_data)
            return {"id": user.user_id, **profile_data}

        return save_in_transaction(transaction, profile_ref, handle_ref)

    def add_education(self, user_id: str, data: EducationRequest) -> Dict[str, Any]:
        return self._mutate(
            PROFILES, user_id,
            lambda profile: profiles.add_education(profile, data),
            ProfileNotFound
        )

    def remove_education(self, user_id: str, edu_id: str) -> Dict[str, Any]:
        return self._mutate(
            PROFILES, user_id,
            lambda profile: profiles.remove_education(profile, edu_id),
            ProfileNotFound
        )
