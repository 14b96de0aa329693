from fastapi import APIRouter

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "Annual Evaluation Cycle Service",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "questions": "/annual-evaluations/questions",
    }
