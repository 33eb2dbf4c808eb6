from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.exceptions import ValidationError
from core.services.budget import ActualsVarianceThresholds
from core.services.risk import RiskThresholds
from infra.settings import SETTINGS_FILE_NAME, default_settings_path, load_engine_settings


def test_defaults_without_file_or_env(tmp_path):
    settings = load_engine_settings(tmp_path / "absent.json", env={})
    assert settings.risk == RiskThresholds()
    assert settings.variance == ActualsVarianceThresholds()
    assert settings.db_path.name == "workbench.db"
    assert settings.db_url.startswith("sqlite:///")


def test_file_values_then_env_overrides(tmp_path):
    path = tmp_path / SETTINGS_FILE_NAME
    path.write_text(
        json.dumps(
            {
                "low_buffer_percent": 7.5,
                "recovery_threshold_percent": 85,
                "recovery_lookback_weeks": 6,
                "actuals_low_threshold_percent": 12,
                "db_path": str(tmp_path / "file.db"),
            }
        ),
        encoding="utf-8",
    )

    settings = load_engine_settings(
        path,
        env={"PW_RECOVERY_THRESHOLD_PERCENT": "90", "PW_ACTUALS_HIGH_THRESHOLD_PERCENT": "3"},
    )

    assert settings.risk == RiskThresholds(low_buffer_percent=7.5, recovery_percent=90.0, lookback_weeks=6)
    assert settings.variance == ActualsVarianceThresholds(low_percent=12.0, high_percent=3.0)
    assert settings.db_path == tmp_path / "file.db"


def test_env_db_path(tmp_path):
    settings = load_engine_settings(tmp_path / "absent.json", env={"PW_DB_PATH": str(tmp_path / "env.db")})
    assert settings.db_path == Path(tmp_path / "env.db")


@pytest.mark.parametrize(
    "env",
    [
        {"PW_LOW_BUFFER_PERCENT": "abc"},
        {"PW_RECOVERY_THRESHOLD_PERCENT": "-1"},
        {"PW_RECOVERY_LOOKBACK_WEEKS": "0"},
        {"PW_RECOVERY_LOOKBACK_WEEKS": "2.5"},
        {"PW_ACTUALS_LOW_THRESHOLD_PERCENT": "nan"},
    ],
)
def test_invalid_values_raise_validation_error(tmp_path, env):
    with pytest.raises(ValidationError) as exc:
        load_engine_settings(tmp_path / "absent.json", env=env)
    assert exc.value.code == "SETTINGS_INVALID"


def test_malformed_file_raises_validation_error(tmp_path):
    path = tmp_path / SETTINGS_FILE_NAME
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_engine_settings(path, env={})


def test_default_settings_path_lives_in_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("PW_DATA_DIR", str(tmp_path / "data"))
    assert default_settings_path() == tmp_path / "data" / SETTINGS_FILE_NAME
