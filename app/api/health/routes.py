from fastapi import APIRouter

from app.utils.time import utc_now_iso

router = APIRouter()

@router.get("/health")
def health_check():
    return {"status": "healthy", "timestamp": utc_now_iso()}
