from fastapi import APIRouter


router = APIRouter()


@router.get("/health", summary="Basic health check endpoint")
async def health_check():
    """Liveness only; store connectivity is checked once at startup."""
    return {"status": "ok"}
