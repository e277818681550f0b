import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin import auth

from models.user import User
from services.posts import PostService

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """
    Verify the Firebase ID token from the Authorization header, or the
    session cookie when no header is sent, and return user info
    """
    authorization = request.headers.get("Authorization")
    if authorization and authorization.startswith("Bearer "):
        token = authorization.split("Bearer ")[1]
        try:
            decoded_token = auth.verify_id_token(token, check_revoked=True, clock_skew_seconds=10)
        except Exception as e:
            logger.info("Invalid authentication token: %s", e)
            raise HTTPException(
                status_code=401,
                detail="Invalid authentication token"
            )
    else:
        session_cookie = request.cookies.get("session")
        if not session_cookie:
            raise HTTPException(
                status_code=401,
                detail="Invalid authorization header"
            )
        try:
            decoded_token = auth.verify_session_cookie(
                session_cookie=session_cookie,
                check_revoked=True,
                clock_skew_seconds=10
            )
        except Exception as e:
            logger.info("Invalid session cookie: %s", e)
            raise HTTPException(status_code=401, detail="Invalid session")

    return User(
        user_id=decoded_token["uid"],
        email=decoded_token.get("email"),
    )


async def get_post_service(request: Request) -> PostService:
    """Get post service from app state"""
    return request.app.state.post_service


# Type annotations for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
Posts = Annotated[PostService, Depends(get_post_service)]
