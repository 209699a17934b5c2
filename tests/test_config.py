"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from portfs.config import Settings, get_settings, reload_settings


@pytest.mark.usefixtures("clean_settings")
class TestSettings:
    """Test Settings sources and precedence."""

    def test_defaults(self) -> None:
        """Should fall back to built-in defaults."""
        settings = Settings()

        assert settings.backend == "auto"
        assert settings.read_only is False
        assert settings.copy_buffer_size == 64 * 1024
        assert settings.log_level == "WARNING"

    def test_environment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read PORTFS_* variables."""
        monkeypatch.setenv("PORTFS_BACKEND", "host")
        monkeypatch.setenv("PORTFS_READ_ONLY", "true")
        monkeypatch.setenv("PORTFS_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.backend == "host"
        assert settings.read_only is True
        assert settings.log_level == "DEBUG"

    def test_yaml_file_in_working_directory(self, tmp_path) -> None:
        """Should load portfs.yaml from the working directory."""
        (tmp_path / "portfs.yaml").write_text("backend: posix\ncopy_buffer_size: 4096\n")

        settings = Settings()

        assert settings.backend == "posix"
        assert settings.copy_buffer_size == 4096

    def test_explicit_config_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should prefer the file named by PORTFS_CONFIG_FILE."""
        (tmp_path / "portfs.yaml").write_text("backend: posix\n")
        explicit = tmp_path / "custom.yaml"
        explicit.write_text("backend: host\n")
        monkeypatch.setenv("PORTFS_CONFIG_FILE", str(explicit))

        assert Settings().backend == "host"

    def test_environment_overrides_yaml(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should give environment variables precedence over YAML."""
        (tmp_path / "portfs.yaml").write_text("backend: posix\nread_only: true\n")
        monkeypatch.setenv("PORTFS_BACKEND", "host")

        settings = Settings()

        assert settings.backend == "host"
        assert settings.read_only is True

    def test_rejects_non_mapping_yaml(self, tmp_path) -> None:
        """Should name the config file when its top level is not a mapping."""
        (tmp_path / "portfs.yaml").write_text("- posix\n- host\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            Settings()

    def test_rejects_invalid_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should validate backend names, buffer sizes and log levels."""
        monkeypatch.setenv("PORTFS_BACKEND", "ftp")
        with pytest.raises(ValidationError):
            Settings()
        monkeypatch.delenv("PORTFS_BACKEND")

        monkeypatch.setenv("PORTFS_COPY_BUFFER_SIZE", "0")
        with pytest.raises(ValidationError):
            Settings()
        monkeypatch.delenv("PORTFS_COPY_BUFFER_SIZE")

        monkeypatch.setenv("PORTFS_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings()

    def test_reload_replaces_global(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should rebuild the global settings on reload."""
        monkeypatch.setenv("PORTFS_BACKEND", "host")

        reloaded = reload_settings()

        assert reloaded is get_settings()
        assert reloaded.backend == "host"
