import pytest

from requestbook import config


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    for name in ("TIMEOUT", "LOG_LEVEL", "EXPORT_DIR", "DEFAULT_CONTENT_TYPE"):
        monkeypatch.delenv(f"{config.ENV_PREFIX}{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    config.reset_settings()
    yield
    config.reset_settings()
