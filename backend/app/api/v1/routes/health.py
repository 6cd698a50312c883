from fastapi import APIRouter

router = APIRouter()


@router.get("/live")
def live() -> dict:
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/ready")
def ready() -> dict:
    """Readiness probe; the grouping core has no external dependencies to wait on."""
    return {"status": "ready"}
