"""Tests for utils module."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add scripts to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'scripts'))

from utils import (
    CommandError,
    ConfigError,
    ContentError,
    NoInputImagesError,
    PipelineError,
    ensure_dir,
    get_env,
    run,
)


class TestGetEnv:
    """Tests for get_env."""

    def test_returns_value(self, monkeypatch):
        monkeypatch.setenv('S3_BUCKET', 'photos')
        assert get_env('S3_BUCKET') == 'photos'

    def test_missing_raises(self, monkeypatch):
        """Unset variables should raise ConfigError with the variable name."""
        monkeypatch.delenv('S3_BUCKET', raising=False)
        with pytest.raises(ConfigError, match='Missing env var: S3_BUCKET'):
            get_env('S3_BUCKET')

    def test_empty_raises(self, monkeypatch):
        """Empty strings count as missing."""
        monkeypatch.setenv('S3_BUCKET', '')
        with pytest.raises(ConfigError):
            get_env('S3_BUCKET')

    def test_fallback_used_when_unset(self, monkeypatch):
        monkeypatch.delenv('S3_BUCKET', raising=False)
        assert get_env('S3_BUCKET', 'default-bucket') == 'default-bucket'


class TestRun:
    """Tests for the external command runner."""

    def test_success(self):
        """A zero exit should return quietly."""
        with patch('subprocess.run', return_value=MagicMock(returncode=0)) as mock_run:
            run('aws', ['s3', 'ls'])

        mock_run.assert_called_once_with(['aws', 's3', 'ls'])

    def test_failure_raises(self):
        """A non-zero exit should raise CommandError with the exit code."""
        with patch('subprocess.run', return_value=MagicMock(returncode=255)):
            with pytest.raises(CommandError, match='aws exited with code 255'):
                run('aws', ['s3', 'sync'])

    def test_missing_executable_propagates(self):
        """A command that cannot be found should propagate the OS error."""
        with pytest.raises(FileNotFoundError):
            run('definitely-not-a-real-command-xyz', [])


class TestHelpers:
    def test_ensure_dir(self, tmp_path):
        target = tmp_path / 'a' / 'b'
        assert ensure_dir(target) == target
        assert target.is_dir()
        ensure_dir(target)  # idempotent

    def test_error_hierarchy(self):
        """All known failures share the PipelineError base."""
        for error in (ConfigError, NoInputImagesError, CommandError, ContentError):
            assert issubclass(error, PipelineError)
