import pytest

from flight_tracker.config import AviationStackConfig, ConfigurationError, load_config


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv('AVIATIONSTACK_API_KEY', 'abc')
    monkeypatch.setenv('AVIATIONSTACK_TIMEOUT_SECONDS', '3.5')
    monkeypatch.setenv('FLASK_DEBUG', '1')
    monkeypatch.setenv('PORT', '8080')

    cfg = load_config()

    assert cfg.aviationstack.api_key == 'abc'
    assert cfg.aviationstack.is_configured
    assert cfg.aviationstack.timeout_seconds == 3.5
    assert cfg.debug is True
    assert cfg.port == 8080


def test_defaults(monkeypatch):
    for name in ('AVIATIONSTACK_API_KEY', 'AVIATIONSTACK_BASE_URL', 'AVIATIONSTACK_TIMEOUT_SECONDS'):
        monkeypatch.delenv(name, raising=False)

    settings = AviationStackConfig()

    assert settings.api_key is None
    assert settings.base_url == 'https://api.aviationstack.com/v1'
    assert settings.timeout_seconds == 10.0


def test_bad_timeout_falls_back_to_default(monkeypatch):
    monkeypatch.setenv('AVIATIONSTACK_TIMEOUT_SECONDS', 'soon')
    assert AviationStackConfig().timeout_seconds == 10.0


def test_require_api_key():
    assert AviationStackConfig(api_key='k').require_api_key() == 'k'
    with pytest.raises(ConfigurationError):
        AviationStackConfig(api_key=None).require_api_key()
