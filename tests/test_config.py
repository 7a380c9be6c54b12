import pytest

from aura.core.config import get_settings, load_settings


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_invalid_value_is_reported_by_name(monkeypatch, caplog, fresh_settings):
    monkeypatch.setenv("PORT", "not-a-port")
    with pytest.raises(SystemExit):
        load_settings()
    assert "invalid value for PORT" in caplog.text
    assert "GEMINI_API_KEY" not in caplog.text


def test_missing_gemini_key_is_reported(monkeypatch, caplog, tmp_path, fresh_settings):
    monkeypatch.delenv("GEMINI_API_KEY")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        load_settings()
    assert "GEMINI_API_KEY is not set" in caplog.text


def test_valid_environment_loads(fresh_settings):
    settings = load_settings()
    assert settings.GEMINI_API_KEY == "test-gemini-key"
    assert settings.MAX_TOOL_ROUNDS == 5
