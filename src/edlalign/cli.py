"""
CLI entry point for EDL Align with argument parsing and environment variable loading.
"""
import argparse
import math
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

from .align import AlignMode
from .timecode import DEFAULT_FPS
from .sync import DEFAULT_OUTPUT_NAME
from .logging import setup_logging
from . import __version__


class EdlAlignCLI:
    """
    Command line interface for EDL subtitle alignment.

    Defaults for fps and mode can come from the environment or a .env file;
    command line arguments override them.
    """

    def __init__( self ):
        self._load_environment();
        self.parser = self._create_parser();
        self.args = None;
        self.logger = None;

    def _load_environment( self ):
        """Load defaults from .env file and system environment."""
        env_file = Path( ".env" );
        if env_file.exists():
            load_dotenv( env_file );

        self.default_fps = os.getenv( "EDLALIGN_FPS" ) or DEFAULT_FPS;
        self.default_mode = os.getenv( "EDLALIGN_MODE" ) or AlignMode.STRICT.value;
        self.backup_dir = os.getenv( "EDLALIGN_BACKUP_DIR" );

    def _create_parser( self ):
        """Create argument parser with all EDL Align options."""
        parser = argparse.ArgumentParser(
            prog="edlalign",
            description="Snap subtitle cue boundaries to the cut points of an edit decision list",
            epilog="Environment variables: EDLALIGN_FPS, EDLALIGN_MODE, EDLALIGN_BACKUP_DIR, EDLALIGN_LOG_DIR"
        );

        parser.add_argument(
            "--edl", "-e",
            required=True,
            type=Path,
            help="Path to edit decision list (.edl)"
        );

        parser.add_argument(
            "--srt", "--sub", "--subs", "-s",
            required=True,
            type=Path,
            dest="subtitle",
            help="Path to subtitle file (.srt format only)"
        );

        parser.add_argument(
            "--output", "-o",
            type=Path,
            default=None,
            help="Output subtitle path (default: aligned_output.srt next to the input)"
        );

        parser.add_argument(
            "--fps",
            type=float,
            default=None,
            help=f"Frame rate of the EDL timecodes (default: {self.default_fps})"
        );

        parser.add_argument(
            "--mode",
            choices=[ mode.value for mode in AlignMode ],
            default=None,
            help=f"strict snaps every boundary, minimal moves only 1:1 matches (default: {self.default_mode})"
        );

        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug mode with verbose output"
        );

        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Perform alignment without writing the output file"
        );

        parser.add_argument(
            "--no-backup",
            action="store_true",
            help="Do not back up an existing output file before overwriting it"
        );

        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        );

        return parser;

    def _apply_defaults( self ):
        """Fill options not given on the command line from the environment."""
        if self.args.fps is None:
            try:
                self.args.fps = float( self.default_fps );
            except ValueError:
                self.logger.warning( f"Ignoring invalid EDLALIGN_FPS={self.default_fps!r}, using {DEFAULT_FPS}" );
                self.args.fps = float( DEFAULT_FPS );

        if self.args.mode is None:
            self.args.mode = self.default_mode;

        if self.args.output is None:
            self.args.output = self.args.subtitle.with_name( DEFAULT_OUTPUT_NAME );

    def _validate_arguments( self ):
        """Validate parsed arguments and environment setup."""
        errors = [];

        if not self.args.edl.exists():
            errors.append( f"EDL file not found: {self.args.edl}" );

        if not self.args.subtitle.exists():
            errors.append( f"Subtitle file not found: {self.args.subtitle}" );

        if self.args.subtitle.suffix.lower() != ".srt":
            errors.append( f"Only .srt subtitle files are supported, got: {self.args.subtitle.suffix}" );

        if not ( math.isfinite( self.args.fps ) and self.args.fps > 0 ):
            errors.append( "Frame rate must be a positive finite number" );

        if self.args.mode not in [ mode.value for mode in AlignMode ]:
            errors.append( f"Unknown alignment mode: {self.args.mode}" );

        if self.args.output.resolve() == self.args.subtitle.resolve():
            errors.append( "Output file must differ from the input subtitle file" );

        return errors;

    def parse_args( self, argv=None ):
        """Parse command line arguments and validate configuration."""
        self.args = self.parser.parse_args( argv );

        self.logger = setup_logging( debug=self.args.debug );

        self._apply_defaults();

        errors = self._validate_arguments();
        if errors:
            self.logger.error( "Configuration errors:" );
            for error in errors:
                self.logger.error( f"  - {error}" );
            sys.exit( 1 );

        self.logger.info( f"EDL Align v{__version__} starting..." );
        self.logger.debug( f"EDL: {self.args.edl}" );
        self.logger.debug( f"Subtitles: {self.args.subtitle}" );
        self.logger.debug( f"Debug mode: {self.args.debug}" );

        return self.args;


def main( argv=None ):
    """Main entry point for the EDL Align CLI."""
    cli = EdlAlignCLI();
    args = cli.parse_args( argv );

    from .sync import EdlSubtitleAligner;

    aligner = EdlSubtitleAligner(
        edl_file=args.edl,
        subtitle_file=args.subtitle,
        output_file=args.output,
        fps=args.fps,
        mode=args.mode,
        debug=args.debug,
        dry_run=args.dry_run,
        backup=not args.no_backup,
        backup_dir=cli.backup_dir
    );

    try:
        result = aligner.run();
        if result:
            cli.logger.info( "Subtitle alignment completed successfully!" );
        else:
            cli.logger.error( "Subtitle alignment failed!" );
            sys.exit( 1 );
    except KeyboardInterrupt:
        cli.logger.warning( "Interrupted by user" );
        sys.exit( 130 );
    except Exception as e:
        cli.logger.error( f"Unexpected error: {e}" );
        if args.debug:
            raise;
        sys.exit( 1 );


if __name__ == "__main__":
    main();
