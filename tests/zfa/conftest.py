import pytest

from zfa.lang.relation import MAX_DEPTH_ENV_VAR, MAX_STEPS_ENV_VAR


@pytest.fixture(params=[3, 4, 5])
def pickle_protocol(request) -> int:
    return request.param


@pytest.fixture(autouse=True)
def clear_limit_env(monkeypatch):
    """Keep decision limits from the surrounding environment out of the tests."""
    monkeypatch.delenv(MAX_STEPS_ENV_VAR, raising=False)
    monkeypatch.delenv(MAX_DEPTH_ENV_VAR, raising=False)
