import logging

import pytest

from zfa import logconfig, main
from zfa.lang.relation import MAX_STEPS_ENV_VAR, UNBOUNDED, DecisionLimits


@pytest.fixture(autouse=True)
def fresh_init(monkeypatch):
    logger = logging.getLogger(logconfig.LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    monkeypatch.setattr(main, "_is_initialized", False)
    monkeypatch.setattr(logconfig, "_installed_handler", None)
    try:
        yield
    finally:
        logger.handlers = handlers
        logger.setLevel(level)


def test_init_returns_limits(monkeypatch):
    assert UNBOUNDED == main.init()

    monkeypatch.setenv(MAX_STEPS_ENV_VAR, "50")
    assert DecisionLimits(max_steps=50) == main.init()


def test_init_rejects_malformed_limits(monkeypatch):
    monkeypatch.setenv(MAX_STEPS_ENV_VAR, "lots")
    with pytest.raises(ValueError):
        main.init()


def test_init_configures_logging_once(monkeypatch):
    monkeypatch.setenv(logconfig.LEVEL_ENV_VAR, "INFO")
    main.init()
    logger = logging.getLogger(logconfig.LOGGER_NAME)
    assert logging.INFO == logger.level

    monkeypatch.setenv(logconfig.LEVEL_ENV_VAR, "DEBUG")
    main.init()
    assert logging.INFO == logger.level

    main.init(force_reload=True)
    assert logging.DEBUG == logger.level
