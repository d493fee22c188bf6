import json

from shared.config import load_config


def test_defaults_without_file(tmp_path, monkeypatch):
    for name in ("DATABASE_URL", "JWT_SECRET", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = load_config(str(tmp_path / "missing.json"))

    assert config.db_url == "sqlite+aiosqlite:///data/database.db"
    assert config.api.port == 3000
    assert config.api.cors_origins == ["*"]
    assert config.auth.jwt_secret is None
    assert config.logging.level == "INFO"


def test_file_values_and_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "db_url": "sqlite+aiosqlite:///file.db",
                "api": {"port": 8080, "cors_origins": ["https://anime.example"]},
                "auth": {"jwt_secret": "from-file"},
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setenv("JWT_SECRET", "from-env")
    monkeypatch.setenv("PORT", "9000")

    config = load_config(str(path))

    assert config.db_url == "sqlite+aiosqlite:///file.db"
    assert config.api.cors_origins == ["https://anime.example"]
    assert config.auth.jwt_secret == "from-env"
    assert config.api.port == 9000
