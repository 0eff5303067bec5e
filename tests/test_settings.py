import logging

import pytest

from streetfinder.config.settings import get_settings
from streetfinder.core.logging import configure_logging


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_packaged_defaults_load(fresh_settings):
    settings = fresh_settings()

    assert settings.wfs.type_name == "nwbwegen:wegvakken"
    assert settings.wfs.page_size == 200
    assert settings.wfs.fields.street == "stt_naam"
    assert settings.projection.projected_crs == "EPSG:28992"
    assert settings.search.default_radius_m <= settings.search.max_radius_m


def test_env_overrides_are_applied(monkeypatch, fresh_settings):
    monkeypatch.setenv("STREETFINDER_LOG_LEVEL", "debug")
    monkeypatch.setenv("STREETFINDER_WFS_BASE_URL", "https://mirror.example.test/wfs")
    monkeypatch.setenv("STREETFINDER_HTTP_TIMEOUT_SECONDS", "3.5")

    settings = fresh_settings()

    assert settings.app.log_level == "debug"
    assert settings.wfs.base_url == "https://mirror.example.test/wfs"
    assert settings.app.http_timeout_seconds == 3.5


def test_config_path_replaces_packaged_defaults(monkeypatch, tmp_path, fresh_settings):
    config = tmp_path / "streetfinder.yaml"
    config.write_text(
        "wfs:\n  base_url: https://other.example.test/wfs\n  page_size: 50\nsearch:\n  max_radius_m: 300\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("STREETFINDER_CONFIG_PATH", str(config))

    settings = fresh_settings()

    assert settings.wfs.page_size == 50
    assert settings.wfs.next_link_replace == "/nwbwegen/wfs"
    assert settings.search.max_radius_m == 300


def test_configure_logging_uses_settings_level(monkeypatch, fresh_settings):
    monkeypatch.setenv("STREETFINDER_LOG_LEVEL", "warning")

    configure_logging()

    assert logging.getLogger().level == logging.WARNING
