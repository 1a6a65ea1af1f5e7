"""
Backup utility that keeps timestamped copies of files before they are overwritten.
"""
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

from .logging import get_logger


class BackupManager:
    """
    Manages backup files with a retention limit.

    - ISO-8601 timestamped copies (<stem>.<YYYY-MM-DDTHH-MM-SS><suffix>)
    - Copies made within the same second get a -N suffix
    - Oldest copies beyond max_backups are removed
    """

    def __init__( self, backup_dir: Path = None, max_backups: int = 25 ):
        self.logger = get_logger();
        self.backup_dir = Path( backup_dir or os.getenv( "EDLALIGN_BACKUP_DIR", "backup" ) );
        self.backup_dir.mkdir( parents=True, exist_ok=True );
        self.max_backups = max_backups;

    def get_backup_filename( self, original_file: Path ) -> str:
        """Generate backup filename with ISO-8601 timestamp (no microseconds)."""
        timestamp = datetime.now().isoformat().replace( ":", "-" ).split( "." )[0];
        return f"{original_file.stem}.{timestamp}{original_file.suffix}";

    def get_existing_backups( self, original_file: Path ) -> List[Tuple[Path, datetime]]:
        """
        Get existing backups of original_file, oldest first.

        Args:
            original_file: Path to original file

        Returns:
            List of (backup_path, timestamp) tuples
        """
        backup_pattern = f"{original_file.stem}.????-??-??T??-??-??*{original_file.suffix}";

        backup_info = [];
        for backup_path in self.backup_dir.glob( backup_pattern ):
            try:
                timestamp_str = backup_path.stem[ len( original_file.stem ) + 1: ][:19];
                date_part, time_part = timestamp_str.split( "T" );
                timestamp = datetime.fromisoformat( f"{date_part}T{time_part.replace( '-', ':' )}" );
                backup_info.append( ( backup_path, timestamp ) );
            except ( ValueError, IndexError ) as e:
                self.logger.debug( f"Skipping malformed backup file {backup_path}: {e}" );

        # Same-second copies carry a -N suffix and sort after the plain name
        backup_info.sort( key=lambda x: ( x[1], len( x[0].name ), x[0].name ) );
        return backup_info;

    def apply_retention_policy( self, original_file: Path ) -> int:
        """
        Remove the oldest backups of original_file beyond max_backups.

        Returns:
            Number of removed backups
        """
        backups = self.get_existing_backups( original_file );
        if len( backups ) <= self.max_backups:
            return 0;

        removed_count = 0;
        for backup_path, _ in backups[: len( backups ) - self.max_backups ]:
            try:
                backup_path.unlink();
                removed_count += 1;
                self.logger.debug( f"Removed old backup: {backup_path.name}" );
            except OSError as e:
                self.logger.warning( f"Could not remove backup {backup_path}: {e}" );

        if removed_count > 0:
            self.logger.info( f"Removed {removed_count} old backup(s) to enforce retention policy" );
        return removed_count;

    def create_backup( self, file_path: Path ) -> Path:
        """
        Create backup of file with timestamp and apply retention policy.

        Args:
            file_path: Path to file to backup

        Returns:
            Path to created backup file
        """
        file_path = Path( file_path );
        if not file_path.exists():
            raise FileNotFoundError( f"File to backup not found: {file_path}" );

        base_name = Path( self.get_backup_filename( file_path ) );
        backup_path = self.backup_dir / base_name;
        counter = 1;
        while backup_path.exists():
            backup_path = self.backup_dir / f"{base_name.stem}-{counter}{base_name.suffix}";
            counter += 1;

        try:
            shutil.copy2( file_path, backup_path );
            self.logger.info( f"Created backup: {backup_path.name}" );
        except OSError as e:
            raise RuntimeError( f"Failed to create backup: {e}" ) from e;

        self.apply_retention_policy( file_path );

        return backup_path;
