from __future__ import annotations

from fastapi import APIRouter

from login_attempts.api import attempts

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(attempts.router)
