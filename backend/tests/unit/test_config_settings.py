"""Unit tests for application settings configuration."""

from pathlib import Path

from inkwell.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_delete_verification_defaults_to_a_single_attempt():
    settings = Settings(_env_file=None)
    assert settings.delete_verify_attempts == 1
    assert settings.delete_verify_delay_seconds == 0.0


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./blog.db")
    monkeypatch.setenv("MAX_UPLOAD_SIZE_MB", "2")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///./blog.db"
    assert settings.max_upload_size_mb == 2
    assert settings.image_bucket == "article-images"
