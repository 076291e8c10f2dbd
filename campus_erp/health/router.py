import time
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from campus_erp import tables
from campus_erp.config.settings import settings
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import DependencyFailure
from campus_erp.health.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["health"]
)

@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint to verify the API is running"""
    logger.info(f"Health check called - Environment: {settings.APP_ENV}")

    response = {
        'status': 'healthy',
        'environment': settings.APP_ENV,
        'timestamp': time.time()
    }

    logger.info(f"Health check response: {response}")
    return response

@router.get("/health/store")
def check_store_health(store: DocumentStore = Depends(get_store)):
    """
    Health check for the document store.
    Performs one point read against the Admin table.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {}
    }

    try:
        store.get(tables.ADMIN, tables.ADMIN.key("__healthcheck__"))
        health_status["checks"]["dynamodb"] = {"connected": True}
    except DependencyFailure as e:
        logger.error(f"Store health check failed: {e.details}")
        health_status["checks"]["dynamodb"] = {"connected": False}
        health_status["status"] = "unhealthy"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)
