"""Build the workload resources a provider revision owns."""

from __future__ import annotations

from typing import Tuple

from .schemas import (
    LABEL_REVISION,
    LABEL_REVISION_NUMBER,
    Deployment,
    ObjectMeta,
    OwnerReference,
    PackageRevision,
    ServiceAccount,
)


DEFAULT_PULL_POLICY = "IfNotPresent"
CONTAINER_NAME = "provider"


def _owner_reference(revision: PackageRevision) -> OwnerReference:
    return OwnerReference(
        api_version=revision.api_version,
        kind=revision.revision_kind,
        name=revision.name,
        uid=revision.uid,
    )


def _metadata(revision: PackageRevision, namespace: str) -> ObjectMeta:
    return ObjectMeta(
        name=revision.name,
        namespace=namespace,
        labels={LABEL_REVISION: revision.name, LABEL_REVISION_NUMBER: str(revision.revision)},
        owner_references=[_owner_reference(revision)],
    )


def build_service_account(revision: PackageRevision, namespace: str) -> ServiceAccount:
    return ServiceAccount(metadata=_metadata(revision, namespace))


def build_deployment(revision: PackageRevision, service_account: ServiceAccount, namespace: str) -> Deployment:
    """Single-replica deployment running the revision's package image under ``service_account``."""

    labels = {LABEL_REVISION: revision.name}
    spec = {
        "replicas": 1,
        "selector": {"matchLabels": dict(labels)},
        "template": {
            "metadata": {"name": revision.name, "labels": dict(labels)},
            "spec": {
                "serviceAccountName": service_account.name,
                "containers": [
                    {
                        "name": CONTAINER_NAME,
                        "image": revision.package,
                        "imagePullPolicy": revision.package_pull_policy or DEFAULT_PULL_POLICY,
                    }
                ],
            },
        },
    }
    return Deployment(metadata=_metadata(revision, namespace), spec=spec)


def build_provider_resources(revision: PackageRevision, namespace: str) -> Tuple[ServiceAccount, Deployment]:
    service_account = build_service_account(revision, namespace)
    return service_account, build_deployment(revision, service_account, namespace)


__all__ = ["build_deployment", "build_provider_resources", "build_service_account"]
