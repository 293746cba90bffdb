"""Runtime configuration helpers for the package revision hooks service."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


IN_CLUSTER_TOKEN_FILE = "/var/run/secrets/kubernetes.io/serviceaccount/token"


class Settings(BaseSettings):
    KUBE_API_SERVER: str = "https://kubernetes.default.svc"
    KUBE_TOKEN: Optional[str] = None
    KUBE_TOKEN_FILE: str = IN_CLUSTER_TOKEN_FILE
    KUBE_CA_BUNDLE: Optional[str] = None
    KUBE_VERIFY_TLS: bool = True
    PACKAGE_NAMESPACE: str = "extensions-system"
    FIELD_MANAGER: str = "package-revision-hooks"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def KUBE_BEARER_TOKEN(self) -> Optional[str]:
        """Explicit token if configured, otherwise the mounted token file if present."""

        if self.KUBE_TOKEN:
            return self.KUBE_TOKEN
        token_path = Path(self.KUBE_TOKEN_FILE)
        if token_path.is_file():
            return token_path.read_text(encoding="utf-8").strip()
        return None

    @property
    def KUBE_VERIFY(self) -> bool | str:
        # requests accepts either a flag or a CA bundle path
        if not self.KUBE_VERIFY_TLS:
            return False
        return self.KUBE_CA_BUNDLE or True


_settings: Optional[Settings] = None


def set_settings(settings: Settings) -> None:
    """Set the singleton settings instance used across the application."""

    global _settings
    _settings = settings


def get_settings() -> Settings:
    """Return the active settings instance, loading it from the environment if needed."""

    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


__all__ = ["Settings", "get_settings", "set_settings"]
