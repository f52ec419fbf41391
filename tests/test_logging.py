import logging

import colorlog
import pytest

from reco_engine.core.logging import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    pkg_level = logging.getLogger("reco_engine").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("reco_engine").setLevel(pkg_level)


def test_configure_logging_installs_colored_handler(restore_root_logger):
    configure_logging(level=logging.DEBUG)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, colorlog.ColoredFormatter)
    assert logging.getLogger("reco_engine").level == logging.DEBUG


def test_pipeline_logs_through_configured_handler(restore_root_logger, capsys, settings):
    from reco_engine.domain.services.pipeline_svc import recommend_products

    configure_logging(level=logging.INFO)
    recommend_products([{"id": "a", "price": 1}], [{"total": 1, "items": []}], settings=settings)
    out = capsys.readouterr().out
    assert "Starting recommend pipeline" in out
    assert "[reco_engine.domain.services.pipeline_svc]" in out


def test_level_defaults_from_debug_setting(restore_root_logger, monkeypatch):
    from reco_engine.core.config import get_settings

    monkeypatch.setenv("RECO_DEBUG", "true")
    get_settings.cache_clear()
    assert configure_logging() == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG

    monkeypatch.setenv("RECO_DEBUG", "false")
    get_settings.cache_clear()
    assert configure_logging() == logging.INFO
    assert logging.getLogger("reco_engine").level == logging.INFO
