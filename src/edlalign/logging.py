"""
Logging system for EDL Align with 5MB truncation check and Rich integration.
"""
import os
import logging
import shutil
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler


MAX_LOG_BYTES = 5 * 1024 * 1024;  # 5MB


class EdlAlignLogger:
    """
    Logger for EDL Align with automatic log rotation and Rich display.

    Features:
    - 5MB size check on startup, rotates if exceeded
    - Rich console output with colors
    - File logging with rotation
    - INFO default, DEBUG with --debug flag
    """

    def __init__( self, name: str = "edlalign", debug: bool = False, logs_dir: Path = None ):
        self.name = name;
        self.debug_mode = debug;
        self.console = Console();

        self.logs_dir = Path( logs_dir or os.getenv( "EDLALIGN_LOG_DIR", "logs" ) );
        self.logs_dir.mkdir( parents=True, exist_ok=True );

        self.log_file = self.logs_dir / f"{name}.log";

        self._check_and_rotate_on_startup();

        self.logger = self._setup_logger();

    def _check_and_rotate_on_startup( self ):
        """Check log file size on startup and rotate if >5MB."""
        if self.log_file.exists() and self.log_file.stat().st_size > MAX_LOG_BYTES:
            timestamp = datetime.now().isoformat().replace( ":", "-" );
            backup_name = self.logs_dir / f"{self.name}.{timestamp}.log";

            shutil.move( str( self.log_file ), str( backup_name ) );
            self.console.print( f"Rotated log file to {backup_name}" );

    def _setup_logger( self ):
        """Setup logger with Rich console and file handlers."""
        level = logging.DEBUG if self.debug_mode else logging.INFO;

        logger = logging.getLogger( self.name );
        logger.setLevel( level );
        logger.propagate = False;

        # Clear existing handlers
        for handler in list( logger.handlers ):
            handler.close();
        logger.handlers.clear();

        console_handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=self.debug_mode
        );
        console_handler.setLevel( level );
        console_handler.setFormatter( logging.Formatter( "%(message)s" ) );
        logger.addHandler( console_handler );

        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=5,
            encoding="utf-8"
        );
        file_handler.setLevel( logging.DEBUG );
        file_handler.setFormatter( logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ) );
        logger.addHandler( file_handler );

        return logger;

    def set_debug( self, debug: bool ):
        """Switch console verbosity after creation."""
        if debug == self.debug_mode:
            return;
        self.debug_mode = debug;
        self.logger = self._setup_logger();

    def debug( self, message, **kwargs ):
        """Log debug message."""
        self.logger.debug( message, **kwargs );

    def info( self, message, **kwargs ):
        """Log info message."""
        self.logger.info( message, **kwargs );

    def warning( self, message, **kwargs ):
        """Log warning message."""
        self.logger.warning( message, **kwargs );

    def error( self, message, **kwargs ):
        """Log error message."""
        self.logger.error( message, **kwargs );


# Global logger instance
_logger = None;


def get_logger( debug: bool = False ) -> EdlAlignLogger:
    """Get the global EDL Align logger instance."""
    global _logger;
    if _logger is None:
        _logger = EdlAlignLogger( debug=debug );
    elif debug:
        _logger.set_debug( True );
    return _logger;


def setup_logging( debug: bool = False ) -> EdlAlignLogger:
    """Setup logging for the application."""
    logger = get_logger( debug=debug );
    logger.set_debug( debug );
    return logger;
