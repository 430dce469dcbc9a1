import os

import pytest

from logfacade import reset_registry


@pytest.fixture(autouse=True)
def clean_logging_env(monkeypatch):
    """
    Every test starts with no level configuration, no dev mode and an empty
    process-wide registry.
    """
    for key in list(os.environ):
        if key.upper().startswith("LOGGING_") or key.upper() == "APP_ENV":
            monkeypatch.delenv(key, raising=False)
    reset_registry()
    yield
    reset_registry()
