import logging
from contextlib import asynccontextmanager

import firebase_admin
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, FIREBASE_CREDENTIALS, LOG_LEVEL
from routes.posts import router as posts_router
from services.errors import PostServiceError, ServerError
from services.firestore import FirestoreDB
from services.posts import PostService

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)

    # Initialize dependencies
    firestore = FirestoreDB(firebase_app)
    app.state.post_service = PostService(store=firestore, users=firestore)
    logger.info("Firebase app %s initialised", firebase_app.name)

    yield
    # Cleanup resources
    firebase_admin.delete_app(firebase_app)


app = FastAPI(lifespan=lifespan)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["set-cookie"]
)


@app.exception_handler(PostServiceError)
async def post_service_error_handler(request: Request, exc: PostServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Log any other failure and answer with an opaque 500"""
    logger.error("Unexpected error in %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    error = ServerError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies as 400 with one entry per offending field"""
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        errors.append({
            "msg": error.get("msg"),
            "param": ".".join(str(part) for part in loc[1:]) or None,
            "location": loc[0] if loc else None,
        })
    return JSONResponse(status_code=400, content={"errors": errors})


# Include routers
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])


@app.get("/")
async def root():
    return {"message": "Posts API running"}
