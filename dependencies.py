import logging
from typing import Annotated

from fastapi import Request, Depends, HTTPException
from firebase_admin.auth import verify_id_token

from config import TOKEN_CLOCK_SKEW_SECONDS
from models.user import User
from services.firestore import FirestoreDB
from utils.logging import EVENT_AUTH_FAILED, log_event

logger = logging.getLogger(__name__)


async def get_current_user(request: Request) -> User:
    """
    Verify Firebase ID token from Authorization header and return user info
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        log_event(logger, "warning", EVENT_AUTH_FAILED, reason="missing_header")
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header"
        )

    token = authorization.split("Bearer ")[1]
    try:
        # Verify the Firebase ID token
        decoded_token = verify_id_token(token, check_revoked=True, clock_skew_seconds=TOKEN_CLOCK_SKEW_SECONDS)
    except Exception as e:
        log_event(logger, "warning", EVENT_AUTH_FAILED, reason=type(e).__name__)
        raise HTTPException(
            status_code=401,
            detail="Invalid authentication token"
        )

    return User(
        user_id=decoded_token["uid"],
        email=decoded_token.get("email"),
        name=decoded_token.get("name", ""),
        avatar=decoded_token.get("picture"),
    )


async def get_firestore(request: Request) -> FirestoreDB:
    """ Get Firestore DB from app state """
    return request.app.state.firestore


CurrentUser = Annotated[User, Depends(get_current_user)]
Firestore = Annotated[FirestoreDB, Depends(get_firestore)]
