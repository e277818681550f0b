import html
import logging
from typing import Callable, List, Protocol

import bleach

from models.post import Comment, Like, Post
from models.user import UserProfile
from services.errors import (
    AlreadyLiked,
    CommentNotFound,
    NotAuthorized,
    NotLiked,
    ValidationError,
)

logger = logging.getLogger(__name__)


class PostStore(Protocol):
    def list_posts(self) -> List[Post]: ...

    def get_post(self, post_id: str) -> Post: ...

    def add_post(self, post: Post) -> Post: ...

    def delete_post(self, post_id: str) -> None: ...

    def update_post(self, post_id: str, mutate: Callable[[Post], None]) -> Post: ...


class UserDirectory(Protocol):
    def get_user_profile(self, user_id: str) -> UserProfile: ...


def clean_text(text: str, param: str = "text") -> str:
    """
    Strip HTML tags from user supplied text and require something to be left

    Only the tags go: entities are decoded again so "Q&A" is stored as typed.

    Raises:
        ValidationError: if the text is empty once cleaned
    """
    cleaned = html.unescape(bleach.clean(text or "", tags=set(), strip=True)).strip()
    if not cleaned:
        raise ValidationError([
            {"msg": "Text is required", "param": param, "location": "body"}
        ])
    return cleaned


class PostService:
    def __init__(self, store: PostStore, users: UserDirectory):
        """
        Initialize the service with the post store and the user directory
        used to snapshot author names and avatars
        """
        self.store = store
        self.users = users

    def create_post(self, user_id: str, text: str) -> Post:
        text = clean_text(text)
        profile = self.users.get_user_profile(user_id)

        new_post = Post(
            text=text,
            name=profile.name,
            avatar=profile.avatar,
            user=user_id,
        )
        post = self.store.add_post(new_post)
        logger.info("User %s created post %s", user_id, post.id)
        return post

    def list_posts(self) -> List[Post]:
        """All posts, most recent first"""
        return self.store.list_posts()

    def get_post(self, post_id: str) -> Post:
        return self.store.get_post(post_id)

    def delete_post(self, user_id: str, post_id: str) -> dict:
        post = self.store.get_post(post_id)

        # Only the author may remove a post
        if post.user != user_id:
            logger.info("User %s refused deletion of post %s owned by %s", user_id, post_id, post.user)
            raise NotAuthorized()

        self.store.delete_post(post_id)
        logger.info("User %s removed post %s", user_id, post_id)
        return {"msg": "Post removed"}

    def like_post(self, user_id: str, post_id: str) -> List[Like]:
        def add_like(post: Post):
            if post.liked_by(user_id):
                raise AlreadyLiked()
            post.likes.insert(0, Like(user=user_id))

        post = self.store.update_post(post_id, add_like)
        logger.info("User %s liked post %s", user_id, post_id)
        return post.likes

    def unlike_post(self, user_id: str, post_id: str) -> List[Like]:
        def remove_like(post: Post):
            for index, like in enumerate(post.likes):
                if like.user == user_id:
                    del post.likes[index]
                    return
            raise NotLiked()

        post = self.store.update_post(post_id, remove_like)
        logger.info("User %s unliked post %s", user_id, post_id)
        return post.likes

    def add_comment(self, user_id: str, post_id: str, text: str) -> List[Comment]:
        text = clean_text(text)
        profile = self.users.get_user_profile(user_id)

        new_comment = Comment(
            text=text,
            name=profile.name,
            avatar=profile.avatar,
            user=user_id,
        )

        def prepend_comment(post: Post):
            post.comments.insert(0, new_comment)

        post = self.store.update_post(post_id, prepend_comment)
        logger.info("User %s commented %s on post %s", user_id, new_comment.id, post_id)
        return post.comments

    def delete_comment(self, user_id: str, post_id: str, comment_id: str) -> List[Comment]:
        def remove_comment(post: Post):
            for index, comment in enumerate(post.comments):
                if comment.id != comment_id:
                    continue
                # Only the comment's author may remove it
                if comment.user != user_id:
                    raise NotAuthorized()
                del post.comments[index]
                return
            raise CommentNotFound()

        post = self.store.update_post(post_id, remove_comment)
        logger.info("User %s removed comment %s from post %s", user_id, comment_id, post_id)
        return post.comments
