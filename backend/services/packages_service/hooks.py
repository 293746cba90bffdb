"""Lifecycle hooks run around each package revision reconciliation pass.

The reconciler calls ``pre`` before it finalises the revision's generic state
and ``post`` afterwards. A hook returns ``None`` on success and raises a
:class:`~services.packages_service.errors.HookError` otherwise; it never
mutates the revision it is given.

Provider revisions own one ServiceAccount and one Deployment. They are
provisioned by ``post`` while the revision is active and torn down by ``pre``
once it becomes inactive. Configuration revisions own nothing.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Type

from .client import ResourceClient
from .errors import (
    ERR_NOT_CONFIGURATION,
    ERR_NOT_PROVIDER,
    ApplyDeploymentError,
    ApplyServiceAccountError,
    DeleteDeploymentError,
    DeleteServiceAccountError,
    DeploymentUnavailableError,
    KindMismatchError,
    ResourceStepError,
)
from .schemas import CONDITION_FALSE, Configuration, Deployment, ManagedResource, Package, PackageRevision, Provider
from .templates import build_provider_resources


logger = logging.getLogger(__name__)


class Hooks(ABC):
    """Pre/Post extension points for one package kind."""

    @abstractmethod
    def pre(self, pkg: Package, rev: PackageRevision, *, timeout: Optional[float] = None) -> None:
        """Run before the revision's generic state is finalised."""

    @abstractmethod
    def post(self, pkg: Package, rev: PackageRevision, *, timeout: Optional[float] = None) -> None:
        """Run after the revision's generic state is finalised."""


@dataclass(frozen=True)
class _Step:
    resource: ManagedResource
    action: Callable[..., Any]
    error: Type[ResourceStepError]


def _run_steps(steps: Sequence[_Step], *, timeout: Optional[float]) -> List[Any]:
    """Run ``steps`` in order, stopping at the first failure."""

    results: List[Any] = []
    for step in steps:
        try:
            results.append(step.action(step.resource, timeout=timeout))
        except Exception as exc:
            logger.warning("%s %s: %s", step.error.context, step.resource.name, exc)
            raise step.error(exc) from exc
    return results


class ProviderHooks(Hooks):
    """Provision and reclaim the workload backing a provider revision."""

    def __init__(self, client: ResourceClient, *, namespace: str) -> None:
        self.client = client
        self.namespace = namespace

    def pre(self, pkg: Package, rev: PackageRevision, *, timeout: Optional[float] = None) -> None:
        if not isinstance(pkg, Provider):
            raise KindMismatchError(ERR_NOT_PROVIDER)
        if rev.is_active:
            return

        service_account, deployment = build_provider_resources(rev, self.namespace)
        # Stop the workload before reclaiming the identity it runs as.
        _run_steps(
            [
                _Step(deployment, self.client.delete, DeleteDeploymentError),
                _Step(service_account, self.client.delete, DeleteServiceAccountError),
            ],
            timeout=timeout,
        )
        logger.info("Removed workload for inactive provider revision %s", rev.name)

    def post(self, pkg: Package, rev: PackageRevision, *, timeout: Optional[float] = None) -> None:
        if not isinstance(pkg, Provider):
            raise KindMismatchError(ERR_NOT_PROVIDER)
        if not rev.is_active:
            return

        service_account, deployment = build_provider_resources(rev, self.namespace)
        _, applied = _run_steps(
            [
                _Step(service_account, self.client.apply, ApplyServiceAccountError),
                _Step(deployment, self.client.apply, ApplyDeploymentError),
            ],
            timeout=timeout,
        )
        if not isinstance(applied, Deployment):
            applied = deployment

        condition = applied.availability()
        if condition is not None and condition.status == CONDITION_FALSE:
            logger.info("Deployment for provider revision %s is unavailable: %s", rev.name, condition.message)
            raise DeploymentUnavailableError(condition.message)


class ConfigurationHooks(Hooks):
    """Configuration packages run no workload; both hooks only check the kind."""

    def pre(self, pkg: Package, rev: PackageRevision, *, timeout: Optional[float] = None) -> None:
        if not isinstance(pkg, Configuration):
            raise KindMismatchError(ERR_NOT_CONFIGURATION)

    def post(self, pkg: Package, rev: PackageRevision, *, timeout: Optional[float] = None) -> None:
        if not isinstance(pkg, Configuration):
            raise KindMismatchError(ERR_NOT_CONFIGURATION)


__all__ = ["ConfigurationHooks", "Hooks", "ProviderHooks"]
