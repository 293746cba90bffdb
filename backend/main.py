"""Application entry point bootstrapping the microkernel and plugins."""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from core.config import get_settings
from kernel import Kernel
from services.packages_service.plugin import PackagesPlugin


def _env_flag(value: str | None) -> bool:
    if value is None:
        return False
    return value.lower() in {"1", "true", "yes", "on"}


def create_kernel() -> Kernel:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    kernel = Kernel(settings=settings, debug=_env_flag(os.getenv("DEBUG")))
    kernel.register_plugin(PackagesPlugin())
    return kernel


kernel = create_kernel()
app: FastAPI = kernel.app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
