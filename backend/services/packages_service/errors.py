"""Failures surfaced by package revision hooks and the resource client."""

from __future__ import annotations

from typing import Optional


ERR_NOT_PROVIDER = "not a provider package"
ERR_NOT_CONFIGURATION = "not a configuration package"
ERR_DELETE_PROVIDER_DEPLOYMENT = "cannot delete provider package deployment"
ERR_DELETE_PROVIDER_SA = "cannot delete provider package service account"
ERR_APPLY_PROVIDER_DEPLOYMENT = "cannot apply provider package deployment"
ERR_APPLY_PROVIDER_SA = "cannot apply provider package service account"
ERR_UNAVAILABLE_PROVIDER_DEPLOYMENT = "deployment unavailable"


class HookError(Exception):
    """Base class for every failure a hook reports to the reconciler."""

    retryable: bool = True


class KindMismatchError(HookError, TypeError):
    """The package handed to a hook is not the kind the hook manages."""

    retryable = False


class ResourceStepError(HookError):
    """A single apply or delete step failed; wraps the underlying cause."""

    context: str = ""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{self.context}: {cause}")
        self.cause = cause


class DeleteDeploymentError(ResourceStepError):
    context = ERR_DELETE_PROVIDER_DEPLOYMENT


class DeleteServiceAccountError(ResourceStepError):
    context = ERR_DELETE_PROVIDER_SA


class ApplyServiceAccountError(ResourceStepError):
    context = ERR_APPLY_PROVIDER_SA


class ApplyDeploymentError(ResourceStepError):
    context = ERR_APPLY_PROVIDER_DEPLOYMENT


class DeploymentUnavailableError(HookError):
    """Resources exist but the workload has not become available yet."""

    def __init__(self, condition_message: str) -> None:
        super().__init__(f"{ERR_UNAVAILABLE_PROVIDER_DEPLOYMENT}: {condition_message}")
        self.condition_message = condition_message


class ResourceClientError(RuntimeError):
    """A remote apply or delete call was rejected or could not be sent."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


__all__ = [
    "ApplyDeploymentError",
    "ApplyServiceAccountError",
    "DeleteDeploymentError",
    "DeleteServiceAccountError",
    "DeploymentUnavailableError",
    "HookError",
    "KindMismatchError",
    "ResourceClientError",
    "ResourceStepError",
]
