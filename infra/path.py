# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "ProjectWorkbench"
COMPANY_NAME = "TECHASH"


def user_data_dir() -> Path:
    """
    Per-user data directory for logs, settings and the database.

    ``PW_DATA_DIR`` overrides the platform location, e.g.:

    Windows:
        C:\\Users\\<User>\\AppData\\Roaming\\TECHASH\\ProjectWorkbench

    macOS:
        ~/Library/Application Support/TECHASH/ProjectWorkbench

    Linux:
        ~/.local/share/TECHASH/ProjectWorkbench
    """
    override = (os.getenv("PW_DATA_DIR") or "").strip()
    try:
        if override:
            path = Path(override)
        else:
            if sys.platform.startswith("win"):
                base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
            elif sys.platform == "darwin":
                base = Path.home() / "Library" / "Application Support"
            else:
                base = Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))
            path = base / COMPANY_NAME / APP_NAME
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def default_db_path() -> Path:
    return user_data_dir() / "workbench.db"


def default_export_dir() -> Path:
    return user_data_dir() / "exports"
