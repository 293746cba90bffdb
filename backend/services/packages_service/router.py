from __future__ import annotations

import logging
from enum import Enum

from fastapi import APIRouter, HTTPException, status as http_status
from fastapi.concurrency import run_in_threadpool

from .api_schemas import HookRequest, HookResponse
from .deps import get_hooks
from .errors import DeploymentUnavailableError, HookError, KindMismatchError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Packages"])


class HookPhase(str, Enum):
    PRE = "pre"
    POST = "post"


def _error_status(exc: HookError) -> int:
    if isinstance(exc, KindMismatchError):
        return http_status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, DeploymentUnavailableError):
        return http_status.HTTP_409_CONFLICT
    return http_status.HTTP_503_SERVICE_UNAVAILABLE


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/revisions/hooks/{phase}", response_model=HookResponse)
async def run_hook(phase: HookPhase, body: HookRequest):
    """Run one lifecycle hook for a revision and report whether it succeeded."""

    hooks = get_hooks(body.revision.kind)
    pkg = body.package.to_domain()
    rev = body.revision.to_domain()
    run = hooks.pre if phase is HookPhase.PRE else hooks.post

    try:
        await run_in_threadpool(run, pkg, rev)
    except HookError as exc:
        logger.warning("%s hook failed for revision %s: %s", phase.value, rev.name, exc)
        raise HTTPException(
            status_code=_error_status(exc),
            detail={"message": str(exc), "retryable": exc.retryable},
        )

    return HookResponse(ok=True)
