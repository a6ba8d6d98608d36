import logging

from catalog import config
from catalog.config import Settings, _env_flag, _env_list, configure_logging


def test_env_flag(monkeypatch):
    for value in ("true", "1", "YES"):
        monkeypatch.setenv("CATALOG_TEST_FLAG", value)
        assert _env_flag("CATALOG_TEST_FLAG", "False") is True
    monkeypatch.setenv("CATALOG_TEST_FLAG", "off")
    assert _env_flag("CATALOG_TEST_FLAG", "True") is False
    monkeypatch.delenv("CATALOG_TEST_FLAG")
    assert _env_flag("CATALOG_TEST_FLAG", "True") is True


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example ,")
    assert Settings().cors_origins == ["http://a.example", "http://b.example"]
    assert _env_list("CATALOG_UNSET_LIST", "x,y") == ["x", "y"]


def test_configure_logging_installs_handler_once(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "level", root.level)

    configure_logging("DEBUG")
    configure_logging("warning")

    assert sum(1 for h in root.handlers if h is config._handler) == 1
    assert root.level == logging.WARNING
