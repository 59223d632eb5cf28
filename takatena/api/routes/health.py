from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict:  # type: ignore[type-arg]
    """Liveness + listing store check."""
    db_status = "connected"
    database = getattr(request.app.state, "database", None)
    if database is None:
        db_status = "error: not initialised"
    else:
        try:
            await database.ping()
        except Exception as exc:
            db_status = f"error: {type(exc).__name__}"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "database": db_status,
    }
