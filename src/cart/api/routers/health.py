from __future__ import annotations

from fastapi import APIRouter, Request

from cart.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    return HealthResponse(status="ok", name=request.app.title, version=request.app.version)
