"""
Health check endpoints for monitoring system status.
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from social_feed.db import get_session

API_VERSION = "1.0.0"

COUNTED_TABLES = ("users", "posts", "hashtags", "follows", "likes", "activity_logs")

router = APIRouter(prefix="/health", tags=["health"])


def check_database_health() -> Dict[str, str]:
    """
    Check database connectivity and health.

    Returns:
        Dict with status and optional error details
    """
    try:
        with get_session() as db:
            result = db.execute(text("SELECT 1")).scalar()
            if result == 1:
                return {"status": "ok"}
            else:
                return {"status": "down", "error": "Unexpected query result"}
    except SQLAlchemyError as e:
        return {"status": "down", "error": f"Database error: {str(e)}"}
    except Exception as e:
        return {"status": "down", "error": f"Connection error: {str(e)}"}


@router.get("/")
def health_check() -> Dict[str, Any]:
    """
    Overall health check.

    Returns:
        Dict containing:
        - status: "ok" | "down"
        - db: database health status
        - version: API version
        - timestamp: current UTC timestamp
    """
    db_health = check_database_health()

    return {
        "status": "down" if db_health["status"] == "down" else "ok",
        "db": db_health,
        "version": API_VERSION,
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/db")
def database_health() -> Dict[str, Any]:
    """
    Database-specific health check with per-table row counts.
    """
    health_status = check_database_health()

    try:
        with get_session() as db:
            health_status.update({
                "tables": {
                    table: db.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar()
                    for table in COUNTED_TABLES
                },
                "timestamp": datetime.utcnow().isoformat(),
            })
    except Exception as e:
        health_status["error"] = f"Extended check failed: {str(e)}"

    return health_status
