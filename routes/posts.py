from typing import List

from fastapi import APIRouter

from dependencies import Posts, CurrentUser
from models.post import Post, PostCreate, CommentCreate, Like, Comment, Message

router = APIRouter()


@router.post("", response_model=Post)
def create_post(body: PostCreate, posts: Posts, current_user: CurrentUser):
    """Create a post authored by the current user"""
    return posts.create_post(current_user.user_id, body.text)


@router.get("", response_model=List[Post])
def get_posts(posts: Posts, current_user: CurrentUser):
    """Get all posts, most recent first"""
    return posts.list_posts()


@router.get("/{post_id}", response_model=Post)
def get_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.get_post(post_id)


@router.delete("/{post_id}", response_model=Message)
def delete_post(post_id: str, posts: Posts, current_user: CurrentUser):
    """Delete a post; only its author may do so"""
    return posts.delete_post(current_user.user_id, post_id)


@router.put("/like/{post_id}", response_model=List[Like])
def like_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.like_post(current_user.user_id, post_id)


@router.put("/unlike/{post_id}", response_model=List[Like])
def unlike_post(post_id: str, posts: Posts, current_user: CurrentUser):
    return posts.unlike_post(current_user.user_id, post_id)


@router.post("/comment/{post_id}", response_model=List[Comment])
def add_comment(post_id: str, body: CommentCreate, posts: Posts, current_user: CurrentUser):
    """Comment on a post"""
    return posts.add_comment(current_user.user_id, post_id, body.text)


@router.delete("/comment/{post_id}/{comment_id}", response_model=List[Comment])
def delete_comment(post_id: str, comment_id: str, posts: Posts, current_user: CurrentUser):
    """Delete a comment; only its author may do so"""
    return posts.delete_comment(current_user.user_id, post_id, comment_id)
