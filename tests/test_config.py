from requestbook import config


def test_defaults():
    settings = config.get_settings()
    assert settings.timeout == 20.0
    assert settings.log_level == "INFO"
    assert settings.export_dir == "exports"
    assert settings.default_content_type == "application/json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REQUESTBOOK_TIMEOUT", "7")
    monkeypatch.setenv("REQUESTBOOK_EXPORT_DIR", "out")
    settings = config.Settings.from_env()
    assert settings.timeout == 7.0
    assert settings.export_dir == "out"


def test_invalid_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("REQUESTBOOK_TIMEOUT", "soon")
    assert config.Settings.from_env().timeout == 20.0
    monkeypatch.setenv("REQUESTBOOK_TIMEOUT", "-1")
    assert config.Settings.from_env().timeout == 20.0


def test_settings_are_cached():
    assert config.get_settings() is config.get_settings()


def test_env_file_is_loaded(monkeypatch, tmp_path):
    # Registers the variable so monkeypatch removes whatever dotenv sets.
    monkeypatch.setenv("REQUESTBOOK_LOG_LEVEL", "unset")
    monkeypatch.delenv("REQUESTBOOK_LOG_LEVEL")
    (tmp_path / ".env").write_text("REQUESTBOOK_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    assert config.get_settings().log_level == "DEBUG"


def test_missing_env_file(tmp_path):
    assert config.load_env_file(tmp_path / "absent.env") is False
