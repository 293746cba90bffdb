"""Test configuration utilities shared across the backend suite."""

from __future__ import annotations

import os
import pathlib
import sys


ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


_DEFAULT_ENV = {
    "KUBE_API_SERVER": "https://kube.test:6443",
    "KUBE_TOKEN": "test-token",
    "KUBE_VERIFY_TLS": "false",
    "PACKAGE_NAMESPACE": "extensions-system",
    "FIELD_MANAGER": "package-revision-hooks",
    "LOG_LEVEL": "DEBUG",
}


for _key, _value in _DEFAULT_ENV.items():
    os.environ.setdefault(_key, _value)
