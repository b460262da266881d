import os
from enum import Enum
from typing import Optional

import yaml
from babel import Locale, UnknownLocaleError
from pydantic import BaseModel, ValidationError, field_validator

from sprintcal.exceptions import SettingsException
from sprintcal.utils import deep_merge_dicts


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warn = "warn"
    error = "error"
    critical = "critical"


class LogFormat(str, Enum):
    json = "json"
    console = "console"


DEFAULT_LOCALE = "fr_FR"


def normalize_locale(value: str) -> str:
    # "fr-FR" and "fr_FR" are both accepted, babel wants the underscore form
    return value.strip().replace("-", "_")


def validate_locale(value: str) -> str:
    value = normalize_locale(value)
    try:
        Locale.parse(value)
    except (UnknownLocaleError, ValueError) as e:
        raise ValueError(f"Unknown locale: {value}") from e
    return value


class SprintcalSettings(BaseModel):
    log_level: LogLevel = LogLevel.info
    log_format: LogFormat = LogFormat.console
    locale: str = DEFAULT_LOCALE
    history_count: int = 6

    @field_validator("locale")
    @classmethod
    def locale_validation(cls, v):
        return validate_locale(v)

    @field_validator("history_count")
    @classmethod
    def history_count_validation(cls, v):
        if v < 1:
            raise ValueError("history_count must be at least 1")
        return v


def _environtment_overrides(config_dict):
    def _override_config(env_name, dict_key):
        if os.environ.get(env_name):
            config_dict[dict_key] = os.environ.get(env_name)

    _override_config("LOG_LEVEL", "log_level")
    _override_config("SPRINTCAL_LOCALE", "locale")
    return config_dict


def _load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(settings_file: Optional[str] = None, override_file: Optional[str] = None) -> SprintcalSettings:
    # Load settings.yml as a dict, a missing default file means built-in defaults
    settings_file = settings_file or os.environ.get("SPRINTCAL_SETTINGS", "settings.yml")
    config_dict = _load_yaml(settings_file) if os.path.exists(settings_file) else {}

    # If override configured, load and merge it to the config
    override_file = override_file or os.environ.get("SPRINTCAL_SETTINGS_OVERRIDE")
    if override_file:
        config_dict = deep_merge_dicts(config_dict, _load_yaml(override_file))

    # Apply environment variable overrides
    config_dict = _environtment_overrides(config_dict)
    try:
        return SprintcalSettings.model_validate(config_dict)
    except ValidationError as e:
        raise SettingsException(str(e)) from e
