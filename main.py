import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, FIREBASE_CREDENTIALS, LOG_LEVEL
from context import RequestContextMiddleware
from routes.health import router as health_router
from routes.posts import router as posts_router
from routes.profile import router as profile_router
from services.errors import ApiError
from services.firestore import FirestoreDB
from utils.logging import EVENT_APP_START, EVENT_REQUEST_REJECTED, EVENT_UNKNOWN_ERROR, log_event, setup_logging

setup_logging(level=getattr(logging, LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_event(logger, "info", EVENT_APP_START, cors_origins=",".join(CORS_ORIGINS))

    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    app.state.firestore = FirestoreDB(firebase_app)

    yield
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)

# middleware to set request context
app.add_middleware(RequestContextMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    log_event(logger, "info", EVENT_REQUEST_REJECTED,
              status=exc.status_code, error=type(exc).__name__)
    return JSONResponse(status_code=exc.status_code, content=exc.body)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log_event(logger, "exception", EVENT_UNKNOWN_ERROR, detail=f"{type(exc).__name__}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Include routers
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])
app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
app.include_router(health_router, tags=["health"])
