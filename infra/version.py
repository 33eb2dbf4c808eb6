from __future__ import annotations

import os
from importlib import metadata

DISTRIBUTION_NAME = "project-workbench"
_DEFAULT_APP_VERSION = "0.3.0"


def _installed_version() -> str | None:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return None


def get_app_version() -> str:
    env_override = (os.getenv("PW_APP_VERSION") or "").strip()
    if env_override:
        return env_override

    return _installed_version() or _DEFAULT_APP_VERSION


__all__ = ["get_app_version"]
