from __future__ import annotations

import pytest

from venuesync.config import (
    ConfigurationError,
    MissingConfigurationError,
    get_miami_beach_config,
    get_nps_config,
    require_env_var,
    require_env_vars,
)
from venuesync.config.env import env_float


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_env_float(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLOAT", raising=False)
    assert env_float("EXAMPLE_FLOAT", 1.5) == 1.5

    monkeypatch.setenv("EXAMPLE_FLOAT", "2.25")
    assert env_float("EXAMPLE_FLOAT", 1.5) == 2.25

    monkeypatch.setenv("EXAMPLE_FLOAT", "fast")
    with pytest.raises(ConfigurationError):
        env_float("EXAMPLE_FLOAT", 1.5)


def test_provider_configs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NPS_API_KEY", "nps-key")

    nps = get_nps_config()
    miami_beach = get_miami_beach_config()

    assert nps.api_key == "nps-key"
    assert nps.resilience.base_url == "https://developer.nps.gov/api/v1"
    assert nps.resilience.cache is not None
    assert miami_beach.category_filter == "361"
    assert "publix" in miami_beach.excluded_name_terms
