from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> JSONResponse:
    errors: list[str] = []

    try:
        async with request.app.state.uow_factory() as uow:
            await uow.ping()
    except Exception as exc:  # noqa: BLE001
        errors.append(f"storage: {exc}")

    sweeper = getattr(request.app.state, "sweeper", None)
    if sweeper is None or not sweeper.running:
        errors.append("presence sweeper: not running")

    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors},
        )
    return JSONResponse(content={"status": "ready"})
