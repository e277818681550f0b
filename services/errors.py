from typing import Any, Dict, List, Optional


class PostServiceError(Exception):
    """Base class for failures that end a posts request with a client-visible response"""
    status_code = 500
    msg = "Server Error"

    def __init__(self, msg: Optional[str] = None):
        if msg is not None:
            self.msg = msg
        super().__init__(self.msg)

    def to_dict(self) -> Dict[str, Any]:
        return {"msg": self.msg}


class ValidationError(PostServiceError):
    status_code = 400
    msg = "Invalid request"

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        super().__init__()

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class PostNotFound(PostServiceError):
    status_code = 404
    msg = "Post not found"


class InvalidPostId(PostServiceError):
    # Malformed ids get the same response as missing posts
    status_code = 404
    msg = "Post not found"


class CommentNotFound(PostServiceError):
    status_code = 404
    msg = "Comment does not exist"


class NotAuthorized(PostServiceError):
    status_code = 401
    msg = "User not authorized"


class AlreadyLiked(PostServiceError):
    status_code = 400
    msg = "Post already liked"


class NotLiked(PostServiceError):
    status_code = 400
    msg = "Post has not yet been liked"


class ServerError(PostServiceError):
    status_code = 500
    msg = "Server Error"


class UserNotFound(ServerError):
    """The caller's profile is missing from the user directory"""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__()
