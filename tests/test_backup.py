"""
Test cases for timestamped backups and retention.
"""
import pytest
from pathlib import Path
from unittest.mock import patch
import sys

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from edlalign.backup import BackupManager


class TestBackupManager:
    """Test backup creation and retention policy."""

    def test_create_backup( self, tmp_path ):
        """Test a copy is created with an ISO-8601 timestamp name."""
        original = tmp_path / "aligned_output.srt";
        original.write_text( "1\n00:00:01,000 --> 00:00:02,000\nHi\n" );

        manager = BackupManager( tmp_path / "backup" );
        backup_path = manager.create_backup( original );

        assert backup_path.exists();
        assert backup_path.read_text() == original.read_text();
        assert backup_path.name.startswith( "aligned_output." );
        assert backup_path.suffix == ".srt";
        assert len( manager.get_existing_backups( original ) ) == 1;

    def test_missing_file( self, tmp_path ):
        """Test backing up a missing file raises FileNotFoundError."""
        manager = BackupManager( tmp_path / "backup" );
        with pytest.raises( FileNotFoundError ):
            manager.create_backup( tmp_path / "missing.srt" );

    def test_retention_removes_oldest( self, tmp_path ):
        """Test backups beyond the limit are removed oldest first."""
        original = tmp_path / "out.srt";
        original.write_text( "x" );

        backup_dir = tmp_path / "backup";
        manager = BackupManager( backup_dir, max_backups=2 );
        for stamp in [ "2024-01-01T10-00-00", "2024-01-02T10-00-00", "2024-01-03T10-00-00" ]:
            ( backup_dir / f"out.{stamp}.srt" ).write_text( "x" );
        ( backup_dir / "out.not-a-stamp.srt" ).write_text( "x" );

        assert manager.apply_retention_policy( original ) == 1;

        remaining = sorted( p.name for p in backup_dir.glob( "out.*.srt" ) );
        assert remaining == [ "out.2024-01-02T10-00-00.srt", "out.2024-01-03T10-00-00.srt", "out.not-a-stamp.srt" ];

    def test_same_second_backups_kept( self, tmp_path ):
        """Test backups sharing a timestamp do not overwrite each other."""
        original = tmp_path / "out.srt";
        manager = BackupManager( tmp_path / "backup" );

        with patch.object( manager, 'get_backup_filename', return_value="out.2024-01-01T10-00-00.srt" ):
            for version in [ "first", "second", "third" ]:
                original.write_text( version );
                manager.create_backup( original );

        backups = manager.get_existing_backups( original );
        assert [ path.name for path, _ in backups ] == [
            "out.2024-01-01T10-00-00.srt",
            "out.2024-01-01T10-00-00-1.srt",
            "out.2024-01-01T10-00-00-2.srt"
        ];
        assert [ path.read_text() for path, _ in backups ] == [ "first", "second", "third" ];

    def test_copy_failure_wrapped( self, tmp_path ):
        """Test copy errors surface as RuntimeError."""
        original = tmp_path / "out.srt";
        original.write_text( "x" );

        manager = BackupManager( tmp_path / "backup" );
        with patch( 'edlalign.backup.shutil.copy2', side_effect=OSError( "disk full" ) ):
            with pytest.raises( RuntimeError ):
                manager.create_backup( original );


if __name__ == '__main__':
    pytest.main( [ __file__ ] );
