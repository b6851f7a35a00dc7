"""Unit tests for settings loading."""

from forum.config import Settings
from forum.domain.value import CommentOrder


def test_git_sha_from_version_file(tmp_path):
    version_file = tmp_path / "version.txt"
    version_file.write_text("abc123\n")

    assert Settings(version_file=version_file).git_sha == "abc123"


def test_git_sha_unknown_without_version_file(tmp_path):
    assert Settings(version_file=tmp_path / "missing.txt").git_sha == "unknown"


def test_nested_values_from_environment(monkeypatch):
    monkeypatch.setenv("STORE__TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("COMMENTS__DEFAULT_ORDER", "newest")
    monkeypatch.setenv("CORS_ORIGINS", '["https://forum.example"]')

    settings = Settings()

    assert settings.store.timeout_seconds == 2.5
    assert settings.comments.default_order == CommentOrder.NEWEST_FIRST
    assert settings.cors_origins == ["https://forum.example"]
