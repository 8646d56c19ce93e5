import logging
import time
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from newsdesk.api import deps
from newsdesk.core.config import settings
from newsdesk.schemas.common import ok

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("")
def health_check(db: Session = Depends(deps.get_db)) -> Any:
    """
    API health check.
    Verifies that the database answers.
    """
    start_time = time.time()
    health_data = {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "database": {"status": "ok"},
    }

    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        health_data["database"] = {"status": "error", "error": str(e)}
        health_data["status"] = "unhealthy"
        logger.error(f"Database health check failed: {str(e)}")

    health_data["response_time_ms"] = round((time.time() - start_time) * 1000, 2)
    status_code = 200 if health_data["status"] == "healthy" else 503
    return JSONResponse(
        status_code=status_code,
        content=ok(health_data, "Service is " + health_data["status"], status_code=status_code),
    )
