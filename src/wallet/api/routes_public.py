# src/wallet/api/routes_public.py
from __future__ import annotations

from fastapi import APIRouter

from wallet.api.routes_public_parts.health import router as health_router
from wallet.api.routes_public_parts.invoke import router as invoke_router
from wallet.api.routes_public_parts.metrics import router as metrics_router
from wallet.api.routes_public_parts.records import router as records_router

public_router = APIRouter()

public_router.include_router(health_router, prefix="/v1", tags=["health"])
public_router.include_router(records_router, prefix="/v1", tags=["records"])
public_router.include_router(invoke_router, prefix="/v1", tags=["invoke"])

# Ops
public_router.include_router(metrics_router, prefix="/v1", tags=["metrics"])
