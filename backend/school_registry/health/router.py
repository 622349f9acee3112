import time
import logging
from datetime import datetime
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from school_registry.config.settings import settings
from school_registry.database import get_db
from school_registry.models import School
from school_registry.schools.exceptions import classify_store_error

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["health"]
)


class HealthResponse(BaseModel):
    status: str
    environment: str
    timestamp: float


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint to verify the API is running"""
    logger.info(f"Health check called - Environment: {settings.APP_ENV}")

    return {
        'status': 'healthy',
        'environment': settings.APP_ENV,
        'timestamp': time.time()
    }


@router.get("/health/database")
def check_database_health(db: Session = Depends(get_db)):
    """
    Health check for the store.
    Verifies the database is reachable and the schools table exists.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": {}
    }

    try:
        db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {"connected": True}
    except SQLAlchemyError as e:
        db.rollback()
        health_status["checks"]["database"] = {"connected": False, "error": str(e)}
        health_status["status"] = "unhealthy"

    if health_status["status"] == "healthy":
        try:
            db.query(School.id).limit(1).all()
            health_status["checks"]["schools_table"] = {"exists": True}
        except SQLAlchemyError as e:
            db.rollback()
            error = classify_store_error(e)
            health_status["checks"]["schools_table"] = {"exists": False, "code": error.code, "error": error.details}
            health_status["status"] = "unhealthy"

    if health_status["status"] != "healthy":
        logger.warning(f"Database health check failed: {health_status['checks']}")

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)
