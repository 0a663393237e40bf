from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from login_attempts.config import settings
from login_attempts.dependencies import get_attempt_store
from login_attempts.exceptions import StoreError, ValidationError
from login_attempts.schemas.attempt import CheckResponse, DeleteResponse
from login_attempts.services.attempt_store import AttemptStore, validate_key

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/attempts", tags=["attempts"])


def _store_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Attempt store unavailable",
    )


@router.get("/check", response_model=CheckResponse)
async def check_attempts(
    address: str,
    action: str,
    limit: int = Query(default=settings.attempts_default_limit, ge=1),
    store: AttemptStore = Depends(get_attempt_store),
) -> CheckResponse:
    """Report how many unexpired failures a caller has against a limit."""
    try:
        key = validate_key(address, action)
        count = await store.count_active(address, action)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    except StoreError:
        raise _store_unavailable()

    return CheckResponse(
        address=key.normalized_address,
        action=key.action,
        limit=limit,
        count=count,
        remaining=max(limit - count, 0),
        allowed=count < limit,
    )


@router.delete("", response_model=DeleteResponse)
async def reset_attempts(
    address: str,
    action: str,
    store: AttemptStore = Depends(get_attempt_store),
) -> DeleteResponse:
    """Forget all recorded failures for an address and action."""
    try:
        deleted = await store.reset(address, action)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    except StoreError:
        raise _store_unavailable()
    return DeleteResponse(deleted=deleted)


@router.post("/cleanup", response_model=DeleteResponse)
async def cleanup_attempts(
    store: AttemptStore = Depends(get_attempt_store),
) -> DeleteResponse:
    """Purge expired attempts. Meant to be called from a scheduler."""
    try:
        deleted = await store.cleanup()
    except StoreError:
        raise _store_unavailable()
    return DeleteResponse(deleted=deleted)
