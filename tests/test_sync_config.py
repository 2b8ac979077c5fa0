"""Unit tests for sync configuration."""

import os
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from pysync.exceptions import SyncConfigError
from pysync.sync.config import SyncConfig
from pysync.sync.ignore import IgnoreSet


class TestSyncConfig:
    """Tests for SyncConfig class."""

    def test_create_config(self):
        """Test creating a config with defaults."""
        config = SyncConfig(Path("/data/src"), Path("/backup/src"), workers=4)

        assert config.source == Path("/data/src")
        assert config.destination == Path("/backup/src")
        assert config.dry_run is False
        assert config.delete is False
        assert config.verbose is False
        assert config.workers == 4

    def test_paths_normalized_to_path(self):
        config = SyncConfig("/data/src", "/backup/src", workers=1)  # type: ignore[arg-type]

        assert isinstance(config.source, Path)
        assert isinstance(config.destination, Path)

    def test_from_paths(self):
        config = SyncConfig.from_paths(
            "/data/src", "/backup/src", delete=True, dry_run=True, workers=2
        )

        assert config.source == Path("/data/src")
        assert config.delete is True
        assert config.dry_run is True
        assert config.workers == 2

    @pytest.mark.parametrize("workers", [0, None])
    def test_default_workers_resolve_to_cpu_count(self, workers):
        with patch("pysync.utils.os.cpu_count", return_value=6):
            config = SyncConfig(Path("/a"), Path("/b"), workers=workers)

        assert config.workers == 6

    def test_negative_workers_rejected(self):
        with pytest.raises(SyncConfigError, match="negative"):
            SyncConfig(Path("/a"), Path("/b"), workers=-2)

    def test_config_is_frozen(self):
        config = SyncConfig(Path("/a"), Path("/b"), workers=1)

        with pytest.raises(AttributeError):
            config.delete = True  # type: ignore[misc]


class TestSyncConfigValidate:
    """Tests for SyncConfig.validate."""

    @pytest.fixture
    def temp_dir(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def test_valid_sibling_directories(self, temp_dir):
        SyncConfig(temp_dir / "src", temp_dir / "dst", workers=1).validate()

    def test_same_paths_rejected(self, temp_dir):
        config = SyncConfig(temp_dir, temp_dir, workers=1)

        with pytest.raises(SyncConfigError, match="cannot be the same"):
            config.validate()

    def test_same_path_through_symlink_rejected(self, temp_dir):
        real = temp_dir / "real"
        real.mkdir()
        os.symlink(real, temp_dir / "link")

        config = SyncConfig(real, temp_dir / "link", workers=1)

        with pytest.raises(SyncConfigError, match="cannot be the same"):
            config.validate()

    def test_destination_inside_source_rejected(self, temp_dir):
        config = SyncConfig(temp_dir, temp_dir / "backup", workers=1)

        with pytest.raises(SyncConfigError, match="inside source"):
            config.validate()

    def test_destination_inside_source_not_ignored_rejected(self, temp_dir):
        config = SyncConfig(temp_dir, temp_dir / "backup", workers=1)

        with pytest.raises(SyncConfigError, match="inside source"):
            config.validate(IgnoreSet.from_lines(["*.tmp"]))

    def test_ignored_destination_inside_source_allowed(self, temp_dir):
        config = SyncConfig(temp_dir, temp_dir / "backup", workers=1, delete=True)

        config.validate(IgnoreSet.from_lines(["backup/"]))

    def test_destination_under_ignored_parent_allowed(self, temp_dir):
        config = SyncConfig(temp_dir, temp_dir / "out" / "mirror", workers=1)

        config.validate(IgnoreSet.from_lines(["/out/"]))

    def test_source_inside_destination_rejected_with_delete(self, temp_dir):
        config = SyncConfig(temp_dir / "data", temp_dir, workers=1, delete=True)

        with pytest.raises(SyncConfigError, match="inside destination"):
            config.validate()

    def test_source_inside_destination_allowed_without_delete(self, temp_dir):
        SyncConfig(temp_dir / "data", temp_dir, workers=1).validate()

    def test_similar_prefix_is_not_nested(self, temp_dir):
        """'data' and 'data-backup' share a prefix but are siblings."""
        SyncConfig(temp_dir / "data", temp_dir / "data-backup", workers=1).validate()
