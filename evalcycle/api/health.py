from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from evalcycle.core.errors import dependency_guard
from evalcycle.db.session import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    # DB ping; an unreachable store answers 503
    with dependency_guard("health check"):
        db.execute(text("SELECT 1"))
    return {"status": "ok"}
