"""Health, readiness, and version endpoints."""

from fastapi import APIRouter

from cq.config import get_settings
from cq.redis_client import get_redis_optional
from cq.storage import get_store

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: returns 200 if the process is alive."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness() -> dict[str, object]:
    """Readiness probe: checks the record store and, when configured, Redis."""
    checks: dict[str, object] = {}

    try:
        checks["store"] = "ok" if await get_store().ping() else "error: ping failed"
    except Exception as exc:
        checks["store"] = f"error: {exc}"

    redis = get_redis_optional()
    if redis is None:
        checks["redis"] = "disabled"
    else:
        try:
            await redis.ping()
            checks["redis"] = "ok"
        except Exception as exc:
            checks["redis"] = f"error: {exc}"

    all_ok = all(v in ("ok", "disabled") for v in checks.values())
    return {"status": "ready" if all_ok else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    """Return API version, environment and store backend."""
    settings = get_settings()
    return {
        "version": settings.app_version,
        "environment": settings.environment,
        "store_backend": settings.store_backend,
    }
