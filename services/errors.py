from typing import Dict


class ApiError(Exception):
    """Error with an HTTP status and a ready-to-send JSON body"""
    status_code = 500
    key = "error"
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    @property
    def body(self) -> Dict[str, str]:
        return {self.key: self.message}


class ValidationFailed(ApiError):
    status_code = 400
    key = "validation"
    message = "Validation failed"

    def __init__(self, errors: Dict[str, str]):
        super().__init__()
        self.errors = errors

    @property
    def body(self) -> Dict[str, str]:
        return dict(self.errors)


class NoPostsFound(ApiError):
    status_code = 404
    key = "nopostsfound"
    message = "No posts found"


class NoPostFound(ApiError):
    status_code = 404
    key = "nopostfound"
    message = "No post found with that ID"


class PostNotFound(ApiError):
    status_code = 404
    key = "postnotfound"
    message = "No post found"


class AlreadyLiked(ApiError):
    status_code = 409
    key = "alreadyliked"
    message = "User already liked this post"


class NotLiked(ApiError):
    status_code = 400
    key = "notliked"
    message = "You have not yet liked this post"


class CommentNotFound(ApiError):
    status_code = 404
    key = "commentnotexists"
    message = "Comment does not exist"


class NotAuthorized(ApiError):
    status_code = 401
    key = "notauthorized"
    message = "User not authorized"


class ProfileNotFound(ApiError):
    status_code = 404
    key = "noprofile"
    message = "There is no profile for this user"


class HandleTaken(ApiError):
    status_code = 400
    key = "handle"
    message = "That handle already exists"


class EducationNotFound(ApiError):
    status_code = 404
    key = "educationnotexists"
    message = "Education does not exist"
