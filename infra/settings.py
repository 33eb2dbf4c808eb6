# infra/settings.py
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from core.exceptions import ValidationError
from core.services.budget.policy import ActualsVarianceThresholds
from core.services.risk.policy import RiskThresholds
from infra.path import default_db_path, user_data_dir

logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "workbench-settings.json"

# settings file key -> environment variable
_ENV_KEYS = {
    "low_buffer_percent": "PW_LOW_BUFFER_PERCENT",
    "recovery_threshold_percent": "PW_RECOVERY_THRESHOLD_PERCENT",
    "recovery_lookback_weeks": "PW_RECOVERY_LOOKBACK_WEEKS",
    "actuals_low_threshold_percent": "PW_ACTUALS_LOW_THRESHOLD_PERCENT",
    "actuals_high_threshold_percent": "PW_ACTUALS_HIGH_THRESHOLD_PERCENT",
    "db_path": "PW_DB_PATH",
}


@dataclass(frozen=True)
class EngineSettings:
    risk: RiskThresholds
    variance: ActualsVarianceThresholds
    db_path: Path

    @property
    def db_url(self) -> str:
        return f"sqlite:///{self.db_path.as_posix()}"


def default_settings_path() -> Path:
    return user_data_dir() / SETTINGS_FILE_NAME


def _read_settings_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Settings file {path} is not valid JSON: {exc}", code="SETTINGS_INVALID") from exc
    if not isinstance(payload, dict):
        raise ValidationError(f"Settings file {path} must hold a JSON object.", code="SETTINGS_INVALID")
    return payload


def _non_negative(key: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Setting '{key}' must be a number, got {value!r}.", code="SETTINGS_INVALID") from exc
    if not math.isfinite(number):
        raise ValidationError(f"Setting '{key}' must be a finite number.", code="SETTINGS_INVALID")
    if number < 0:
        raise ValidationError(f"Setting '{key}' cannot be negative.", code="SETTINGS_INVALID")
    return number


def _positive_int(key: str, value: Any) -> int:
    number = _non_negative(key, value)
    if number < 1 or number != int(number):
        raise ValidationError(f"Setting '{key}' must be a whole number of weeks.", code="SETTINGS_INVALID")
    return int(number)


def load_engine_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> EngineSettings:
    """
    Thresholds and database location.

    Defaults, then the JSON settings file, then ``PW_*`` environment variables.
    """
    env = os.environ if env is None else env
    settings_path = Path(path) if path is not None else default_settings_path()
    raw: dict[str, Any] = dict(_read_settings_file(settings_path))

    for key, env_name in _ENV_KEYS.items():
        value = (env.get(env_name) or "").strip()
        if value:
            raw[key] = value

    risk_defaults = RiskThresholds()
    variance_defaults = ActualsVarianceThresholds()
    risk = RiskThresholds(
        low_buffer_percent=_non_negative(
            "low_buffer_percent", raw.get("low_buffer_percent", risk_defaults.low_buffer_percent)
        ),
        recovery_percent=_non_negative(
            "recovery_threshold_percent", raw.get("recovery_threshold_percent", risk_defaults.recovery_percent)
        ),
        lookback_weeks=_positive_int(
            "recovery_lookback_weeks", raw.get("recovery_lookback_weeks", risk_defaults.lookback_weeks)
        ),
    )
    variance = ActualsVarianceThresholds(
        low_percent=_non_negative(
            "actuals_low_threshold_percent",
            raw.get("actuals_low_threshold_percent", variance_defaults.low_percent),
        ),
        high_percent=_non_negative(
            "actuals_high_threshold_percent",
            raw.get("actuals_high_threshold_percent", variance_defaults.high_percent),
        ),
    )
    db_path = Path(raw["db_path"]) if raw.get("db_path") else default_db_path()

    logger.info(
        "Engine settings loaded (buffer %.1f%%, recovery %.1f%% over %d weeks)",
        risk.low_buffer_percent,
        risk.recovery_percent,
        risk.lookback_weeks,
    )
    return EngineSettings(risk=risk, variance=variance, db_path=db_path)


__all__ = ["EngineSettings", "SETTINGS_FILE_NAME", "default_settings_path", "load_engine_settings"]
