import logging

from application.rest.schemas.output.common_output import ErrorResponse, HealthResponse
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.orm import Session
from utils.dependencies import get_db

logger = logging.getLogger(__name__)
router = APIRouter()

SERVICE_NAME = "ideabase-notes-service"


@router.get(
    path="/health",
    description="Liveness probe; answers as long as the process serves requests.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", service=SERVICE_NAME)


@router.get(
    path="/health/ready",
    description="Readiness probe; checks that the database answers.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "model": ErrorResponse,
            "description": "The database cannot be reached.",
            "content": {
                "application/json": {"example": {"detail": "Database unavailable"}}
            },
        },
    },
)
def readiness_check(db: Session = Depends(get_db)) -> HealthResponse:
    """Run ``SELECT 1`` against the relational store.

    Raises:
        HTTPException: 503 if the query fails.
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from e
    return HealthResponse(status="ready", service=SERVICE_NAME)
