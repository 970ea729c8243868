"""Health check endpoint for monitoring and load balancers."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from catalog.database import get_db
from catalog import __version__


router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Liveness plus a database round trip."""
    status = {
        "status": "healthy",
        "version": __version__,
        "checks": {}
    }

    try:
        db.execute(text("SELECT 1"))
        status["checks"]["database"] = "ok"
    except SQLAlchemyError as e:
        status["checks"]["database"] = f"error: {str(e)}"
        status["status"] = "unhealthy"

    return status
