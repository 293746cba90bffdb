"""Resource management against the orchestration platform's REST API."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional, TypeVar

import requests

from .errors import ResourceClientError
from .schemas import ManagedResource


logger = logging.getLogger(__name__)

APPLY_PATCH_CONTENT_TYPE = "application/apply-patch+yaml"

R = TypeVar("R", bound=ManagedResource)


class ResourceClient(ABC):
    """Idempotent create-or-update and removal of managed resources."""

    @abstractmethod
    def apply(self, obj: R, *, timeout: Optional[float] = None) -> R:
        """Create or update ``obj`` and return it as the platform now holds it."""

    @abstractmethod
    def delete(self, obj: ManagedResource, *, timeout: Optional[float] = None) -> None:
        """Remove ``obj``. A resource that is already absent is not an error."""


class KubernetesResourceClient(ResourceClient):
    """Server-side apply and background deletion over a shared ``requests`` session."""

    def __init__(
        self,
        api_server: str,
        *,
        field_manager: str,
        token: Optional[str] = None,
        verify: bool | str = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_server = api_server.rstrip("/")
        self.field_manager = field_manager
        self.session = session or requests.Session()
        self.session.verify = verify
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _url(self, obj: ManagedResource) -> str:
        return f"{self.api_server}/{obj.path()}"

    # -------- Apply --------
    def apply(self, obj: R, *, timeout: Optional[float] = None) -> R:
        logger.debug("Applying %s %s/%s", obj.KIND, obj.namespace, obj.name)
        try:
            resp = self.session.patch(
                self._url(obj),
                params={"fieldManager": self.field_manager, "force": "true"},
                data=json.dumps(obj.to_manifest()),
                headers={"Content-Type": APPLY_PATCH_CONTENT_TYPE},
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise ResourceClientError(f"apply {obj.KIND} {obj.name} failed: {e}") from e

        if not resp.ok:
            raise self._error("apply", obj, resp)
        return type(obj).from_manifest(resp.json())

    # -------- Delete --------
    def delete(self, obj: ManagedResource, *, timeout: Optional[float] = None) -> None:
        logger.debug("Deleting %s %s/%s", obj.KIND, obj.namespace, obj.name)
        try:
            resp = self.session.delete(
                self._url(obj),
                json={"apiVersion": "v1", "kind": "DeleteOptions", "propagationPolicy": "Background"},
                timeout=timeout,
            )
        except requests.RequestException as e:
            raise ResourceClientError(f"delete {obj.KIND} {obj.name} failed: {e}") from e

        if resp.status_code == 404:
            logger.debug("%s %s already absent", obj.KIND, obj.name)
            return
        if not resp.ok:
            raise self._error("delete", obj, resp)

    @staticmethod
    def _error(verb: str, obj: ManagedResource, resp: requests.Response) -> ResourceClientError:
        # Status objects carry a human readable message and a machine reason
        try:
            body = resp.json()
        except ValueError:
            body = {}
        message = body.get("message") or resp.text or resp.reason
        return ResourceClientError(
            f"{verb} {obj.KIND} {obj.name} failed ({resp.status_code}): {message}",
            status_code=resp.status_code,
            reason=body.get("reason"),
        )


__all__ = ["KubernetesResourceClient", "ResourceClient"]
