import logging
from typing import Callable, List

import firebase_admin
from firebase_admin import firestore as fs
from google.cloud import firestore

from config import POSTS_COLLECTION, USERS_COLLECTION
from models.post import Post
from models.user import UserProfile
from services.errors import InvalidPostId, PostNotFound, UserNotFound

logger = logging.getLogger(__name__)

# Firestore limits a document id to 1500 bytes of UTF-8
MAX_ID_BYTES = 1500


def is_valid_document_id(doc_id: str) -> bool:
    """Check a string against Firestore's rules for a document id"""
    if not doc_id or "/" in doc_id:
        return False
    if doc_id in (".", ".."):
        return False
    if doc_id.startswith("__") and doc_id.endswith("__"):
        return False
    return len(doc_id.encode("utf-8")) <= MAX_ID_BYTES


class FirestoreDB:
    def __init__(self, app: firebase_admin.App, client=None):
        self.db = client if client is not None else fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def _post_ref(self, post_id: str):
        if not is_valid_document_id(post_id):
            raise InvalidPostId()
        return self.collection(POSTS_COLLECTION).document(post_id)

    @staticmethod
    def _to_post(snapshot) -> Post:
        return Post.model_validate({**snapshot.to_dict(), "id": snapshot.id})

    @staticmethod
    def _to_document(post: Post) -> dict:
        return post.model_dump(exclude={"id"})

    def list_posts(self) -> List[Post]:
        """Get all posts sorted by date descending"""
        posts_ref = self.collection(POSTS_COLLECTION).order_by(
            "date", direction=firestore.Query.DESCENDING
        ).stream()
        return [self._to_post(doc) for doc in posts_ref]

    def get_post(self, post_id: str) -> Post:
        """
        Get a post by ID

        Raises:
            InvalidPostId: if post_id can not be a Firestore document id
            PostNotFound: if no post has that id
        """
        snapshot = self._post_ref(post_id).get()
        if not snapshot.exists:
            raise PostNotFound()
        return self._to_post(snapshot)

    def add_post(self, post: Post) -> Post:
        """Store a new post under an auto-generated id and return it with the id set"""
        new_post_ref = self.collection(POSTS_COLLECTION).document()
        new_post_ref.set(self._to_document(post))
        return post.model_copy(update={"id": new_post_ref.id})

    def delete_post(self, post_id: str) -> None:
        self._post_ref(post_id).delete()

    def update_post(self, post_id: str, mutate: Callable[[Post], None]) -> Post:
        """
        Apply mutate to a post and write back its likes and comments atomically

        The read and the write share one transaction, so Firestore re-runs
        mutate against fresh data when another request changed the post in
        between. Exceptions raised by mutate abort the transaction and
        propagate unchanged.

        Returns:
            The post as written
        """
        post_ref = self._post_ref(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise PostNotFound()

            post = self._to_post(snapshot)
            mutate(post)

            document = self._to_document(post)
            transaction.update(post_ref, {
                "likes": document["likes"],
                "comments": document["comments"],
            })
            return post

        return update_in_transaction(transaction, post_ref)

    def get_user_profile(self, user_id: str) -> UserProfile:
        """
        Look up the display fields of a user

        Raises:
            UserNotFound: if the user has no profile document
        """
        snapshot = self.collection(USERS_COLLECTION).document(user_id).get()
        if not snapshot.exists:
            logger.warning("No profile document for user %s", user_id)
            raise UserNotFound(user_id)

        user_data = snapshot.to_dict()
        return UserProfile(
            name=user_data.get("username", "Unknown"),
            avatar=user_data.get("profileIcon"),
        )
