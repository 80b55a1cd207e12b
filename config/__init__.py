"""Settings for the active deployment, selected by the MODE (or APP_ENV) variable."""
from __future__ import annotations

import os

from .base import RegistrySettings
from .dev import DevSettings
from .local import LocalSettings
from .prod import ProdSettings
from .stage import StageSettings
from .test import TestSettings

SETTINGS_BY_MODE: dict[str, type[RegistrySettings]] = {
    "local": LocalSettings,
    "dev": DevSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
    "test": TestSettings,
}

MODE = (os.environ.get("MODE") or os.environ.get("APP_ENV") or "local").lower()

SettingsClass = SETTINGS_BY_MODE.get(MODE, LocalSettings)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "MODE", "RegistrySettings"]
