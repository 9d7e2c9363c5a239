"""Top-level API router."""

from __future__ import annotations

from fastapi import APIRouter

from .endpoints.cv import router as cv_router
from .endpoints.system import ApiInfoResponse, api_info
from .endpoints.system import router as system_router

api_router = APIRouter(prefix="/api")
api_router.add_api_route("", api_info, methods=["GET"], response_model=ApiInfoResponse, tags=["system"])
api_router.include_router(system_router)
api_router.include_router(cv_router)
