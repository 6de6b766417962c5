import logging
from contextlib import asynccontextmanager

from application.rest.routers import (
    router_attachments,
    router_auth,
    router_health,
    router_notes,
    router_tags,
    router_upload,
)
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from infrastructure.database import init_db
from utils.config import CORS_ALLOW_HEADERS
from utils.dependencies import get_session_factory, get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

UPLOAD_PATH_PREFIX = "/functions/"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.create_tables:
        init_db(get_session_factory().kw["bind"])
    logger.info("IdeaBase Notes Service started")
    yield


# FastAPI app
app = FastAPI(
    title="IdeaBase Notes Service",
    description="Notes, tags and file attachments for IdeaBase",
    version="1.0.0",
    lifespan=lifespan,
)

# Preflight requests from the browser client carry the managed backend headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_origins != ["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed upload bodies in the upload function's error shape."""
    if request.url.path.startswith(UPLOAD_PATH_PREFIX):
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid upload request",
                "details": [
                    {"loc": list(error["loc"]), "msg": error["msg"]}
                    for error in exc.errors()
                ],
            },
        )
    return await request_validation_exception_handler(request, exc)


app.include_router(router_health.router, tags=["health"])
app.include_router(router_auth.router, tags=["auth"])
app.include_router(router_notes.router, tags=["notes"])
app.include_router(router_tags.router, tags=["tags"])
app.include_router(router_upload.router, tags=["upload"])
app.include_router(router_attachments.router, tags=["attachments"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8002)
