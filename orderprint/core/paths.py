from __future__ import annotations

import os
from pathlib import Path

HOME_ENV = "ORDERPRINT_HOME"


def project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def user_writable_dir() -> Path:
    """Directory for settings.json and the local order database.

    - ORDERPRINT_HOME wins when set.
    - Otherwise use the project root.
    """
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    return project_root()


def settings_path() -> Path:
    """Location for settings.json that is readable and writable."""
    return user_writable_dir() / "settings.json"


def db_path() -> Path:
    return user_writable_dir() / "orderprint.db"
