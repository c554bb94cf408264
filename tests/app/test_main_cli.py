from __future__ import annotations

import json

import pytest

from venuesync import main as main_module
from venuesync.config import ImportConfig, MissingConfigurationError
from venuesync.domain.errors import StoreUnavailableError
from venuesync.domain.ingest import RunSummary
from venuesync.domain.model import Provider
from venuesync.domain.ports import ProviderQuery


def _capture(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    captured: dict[str, object] = {}

    def fake_import(query: ProviderQuery, **kwargs: object) -> RunSummary:
        captured["query"] = query
        captured.update(kwargs)
        return RunSummary(inserted=2, unchanged=1)

    monkeypatch.setattr(main_module, "import_venues", fake_import)
    return captured


def test_main_cli_defaults(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("VENUESYNC_FETCH_TIMEOUT_SECONDS", raising=False)
    captured = _capture(monkeypatch)

    main_module.main(["import"])

    assert captured["query"] == ProviderQuery()
    assert captured["providers"] is None
    config = captured["config"]
    assert isinstance(config, ImportConfig)
    assert config.fetch_timeout_seconds == 60.0
    report = json.loads(capsys.readouterr().out)
    assert report["inserted"] == 2
    assert report["unchanged"] == 1
    assert report["provider_issues"] == []


def test_main_cli_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture(monkeypatch)

    main_module.main(
        [
            "import",
            "--provider",
            "yelp",
            "--provider",
            "nps",
            "--latitude",
            "25.79",
            "--longitude",
            "-80.13",
            "--radius",
            "5000",
            "--term",
            "pizza",
            "--category",
            "restaurants",
            "--category",
            "bars",
            "--state-code",
            "FL",
            "--max-items",
            "25",
            "--timeout",
            "12.5",
        ]
    )

    assert captured["providers"] == [Provider.YELP, Provider.NPS]
    assert captured["query"] == ProviderQuery(
        latitude=25.79,
        longitude=-80.13,
        radius_meters=5000,
        term="pizza",
        categories=("restaurants", "bars"),
        state_code="FL",
        max_items=25,
    )
    config = captured["config"]
    assert isinstance(config, ImportConfig)
    assert config.fetch_timeout_seconds == 12.5


@pytest.mark.parametrize(
    "argv",
    [
        ["import", "--latitude", "25.79"],
        ["import", "--radius", "0"],
        ["import", "--max-items", "-1"],
        ["import", "--timeout", "0"],
        ["import", "--provider", "foursquare"],
        [],
    ],
)
def test_main_cli_rejects_invalid_arguments(
    monkeypatch: pytest.MonkeyPatch, argv: list[str]
) -> None:
    _capture(monkeypatch)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(argv)

    assert excinfo.value.code == 2


def test_main_cli_rejects_invalid_timeout_env(monkeypatch: pytest.MonkeyPatch) -> None:
    _capture(monkeypatch)
    monkeypatch.setenv("VENUESYNC_FETCH_TIMEOUT_SECONDS", "soon")

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["import"])

    assert excinfo.value.code == 2


def test_main_cli_reports_missing_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_import(*_: object, **__: object) -> RunSummary:
        raise MissingConfigurationError("Missing configuration for: YELP_API_KEY")

    monkeypatch.setattr(main_module, "import_venues", fake_import)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["import", "--provider", "yelp"])

    assert excinfo.value.code == 2


def test_main_cli_prints_partial_summary_when_store_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_import(*_: object, **__: object) -> RunSummary:
        raise StoreUnavailableError("database unavailable", summary=RunSummary(inserted=3))

    monkeypatch.setattr(main_module, "import_venues", fake_import)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["import"])

    assert excinfo.value.code == 1
    output = capsys.readouterr()
    assert json.loads(output.out)["inserted"] == 3
    assert "database unavailable" in output.err
