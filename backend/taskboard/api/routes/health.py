"""
Health check endpoints.

Liveness and readiness probes for the API server.
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.config import get_settings
from taskboard.database import get_db

router = APIRouter()
settings = get_settings()

REQUIRED_TABLES = ("users", "todos")


@router.get("/health")
def health_check(db: Session = Depends(get_db)) -> dict:
    """
    Basic health check endpoint.

    Example response:
        {
            "status": "healthy",
            "app_name": "Taskboard",
            "version": "0.1.0",
            "timestamp": "2026-10-19T12:00:00Z",
            "database": "connected"
        }
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError as e:
        db_status = f"error: {e}"

    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "database": db_status,
    }


@router.get("/health/ready")
def readiness_check(db: Session = Depends(get_db)):
    """
    Readiness check for the service.

    Ready once the database answers and the users/todos schema exists.
    Responds 503 otherwise.
    """
    checks = {}
    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "ok"
        existing = set(inspect(db.get_bind()).get_table_names())
        missing = [name for name in REQUIRED_TABLES if name not in existing]
        checks["schema"] = "ok" if not missing else f"missing tables: {', '.join(missing)}"
    except SQLAlchemyError as e:
        checks["database"] = f"failed: {e}"

    ready = all(value == "ok" for value in checks.values()) and "schema" in checks
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"ready": ready, "checks": checks},
    )
