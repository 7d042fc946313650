from app.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.PORT == 3001
    assert settings.RATE_LIMIT_MAX_REQUESTS == 100
    assert settings.RATE_LIMIT_WINDOW_SECONDS == 900
    assert settings.cors_origins == ["http://localhost:3000"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("FRONTEND_URL", "https://a.example, https://b.example")
    monkeypatch.setenv("DATASET_PATH", "  ")

    settings = Settings(_env_file=None)

    assert settings.PORT == 8080
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.DATASET_PATH is None


def test_wildcard_origin(monkeypatch):
    monkeypatch.setenv("FRONTEND_URL", "*")
    assert Settings(_env_file=None).cors_origins == ["*"]
