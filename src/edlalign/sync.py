"""
Main alignment controller that orchestrates reading, aligning and writing.
"""
from pathlib import Path
from typing import List, Optional, Tuple

from .align import AlignMode, calculate_shift_stats, minimal_align, strict_align
from .backup import BackupManager
from .edl import read_edl_file
from .match import build_one_to_one_map, count_matches
from .subtitles import SubtitleEntry, SubtitleProcessor
from .timecode import normalize_fps
from .logging import get_logger


DEFAULT_OUTPUT_NAME = "aligned_output.srt";


class EdlSubtitleAligner:
    """
    Main controller for one alignment run.

    Orchestrates:
    1. EDL parsing into cut points
    2. Subtitle parsing
    3. Alignment (exact-snap or minimal-edit)
    4. Backup and output writing
    """

    def __init__(
        self,
        edl_file: Path,
        subtitle_file: Path,
        output_file: Path = None,
        fps: float = 60,
        mode: str = "strict",
        debug: bool = False,
        dry_run: bool = False,
        backup: bool = True,
        backup_dir: Path = None
    ):
        self.edl_file = Path( edl_file );
        self.subtitle_file = Path( subtitle_file );
        self.output_file = Path( output_file ) if output_file else self.subtitle_file.with_name( DEFAULT_OUTPUT_NAME );
        self.fps = normalize_fps( fps );
        self.mode = AlignMode( mode );
        self.debug = debug;
        self.dry_run = dry_run;
        self.backup = backup;
        self.backup_dir = backup_dir;

        self.logger = get_logger( debug=debug );
        self.subtitle_processor = SubtitleProcessor();

        # Results storage
        self.cuts: Tuple[float, ...] = ();
        self.subtitles: List[SubtitleEntry] = [];
        self.aligned: List[SubtitleEntry] = [];
        self.cue_to_cut: Optional[List[Optional[int]]] = None;

    def load_cuts( self ) -> Tuple[float, ...]:
        """Read the EDL and extract cut points."""
        self.logger.info( "=== STEP 1: EDL PARSING ===" );
        self.logger.info( f"FPS: {self.fps:g}" );

        self.cuts = read_edl_file( self.edl_file, self.fps );

        self.logger.info( f"Cut points: {len( self.cuts )}" );
        return self.cuts;

    def load_subtitles( self ) -> List[SubtitleEntry]:
        """Parse the subtitle file."""
        self.logger.info( "=== STEP 2: SUBTITLE PARSING ===" );

        self.subtitles = self.subtitle_processor.parse_subtitle_file( self.subtitle_file );
        if not self.subtitles:
            raise RuntimeError( "Failed to parse subtitle file or no subtitles found" );

        self.logger.info( f"Subtitle cues: {len( self.subtitles )}" );
        return self.subtitles;

    def align_subtitles( self ) -> List[SubtitleEntry]:
        """Align the loaded cues to the loaded cut points."""
        self.logger.info( "=== STEP 3: ALIGNMENT ===" );
        self.logger.info( f"Mode: {'exact snap' if self.mode is AlignMode.STRICT else 'minimal edit'}" );

        if not self.subtitles:
            raise RuntimeError( "No subtitles loaded. Run load_subtitles first." );

        if self.mode is AlignMode.STRICT:
            if not self.cuts:
                self.logger.warning( "No cut points: subtitles are passed through unchanged" );
            self.aligned = strict_align( self.subtitles, self.cuts );
        else:
            self.cue_to_cut = build_one_to_one_map( self.subtitles, self.cuts );
            self.logger.info( f"Matched cues: {count_matches( self.cue_to_cut )}/{len( self.subtitles )}" );
            self.aligned = minimal_align( self.subtitles, self.cuts, self.cue_to_cut );

        if self.debug:
            for old, new in zip( self.subtitles, self.aligned ):
                self.logger.debug( f"Cue {old.index}: {old.start:.3f}-{old.end:.3f} -> {new.start:.3f}-{new.end:.3f}" );

        return self.aligned;

    def write_output( self ) -> Path:
        """Back up any existing output file and write the aligned subtitles."""
        self.logger.info( "=== STEP 4: OUTPUT ===" );

        if not self.aligned:
            raise RuntimeError( "No aligned subtitles. Run align_subtitles first." );

        if self.output_file.resolve() == self.subtitle_file.resolve():
            raise RuntimeError( f"Refusing to overwrite the input subtitle file: {self.subtitle_file}" );

        if self.dry_run:
            self.logger.info( f"Dry run: Would save aligned subtitles to {self.output_file}" );
            return self.output_file;

        if self.backup and self.output_file.exists():
            BackupManager( self.backup_dir ).create_backup( self.output_file );

        self.subtitle_processor.save_subtitle_file( self.aligned, self.output_file );
        self.logger.info( f"Saved aligned subtitles to: {self.output_file}" );

        return self.output_file;

    def get_alignment_stats( self ) -> dict:
        """Statistics about the last alignment."""
        stats = calculate_shift_stats( self.subtitles, self.aligned );
        if not stats:
            return {};

        stats['total_cuts'] = len( self.cuts );
        stats['mode'] = self.mode.value;
        if self.cue_to_cut is not None:
            stats['matched_cues'] = count_matches( self.cue_to_cut );
        return stats;

    def run( self ) -> bool:
        """
        Run the complete alignment process.

        Returns:
            True if successful, False if failed
        """
        try:
            self.logger.info( "Starting EDL subtitle alignment" );
            self.logger.info( f"EDL: {self.edl_file}" );
            self.logger.info( f"Subtitles: {self.subtitle_file}" );

            self.load_cuts();
            self.load_subtitles();
            self.align_subtitles();
            self.write_output();

            return self._log_final_results();

        except Exception as e:
            self.logger.error( f"Subtitle alignment failed: {e}" );
            if self.debug:
                raise;
            return False;

    def _log_final_results( self ) -> bool:
        """Log final results and statistics."""
        self.logger.info( "=== ALIGNMENT COMPLETE ===" );

        stats = self.get_alignment_stats();
        if stats:
            self.logger.info( f"✓ Moved cues: {stats['moved_cues']}/{stats['total_cues']}" );
            self.logger.info( f"✓ Average start shift: {stats['avg_shift']:.3f}s (max {stats['max_shift']:.3f}s)" );
            if 'matched_cues' in stats:
                self.logger.info( f"✓ Matched cues: {stats['matched_cues']}/{stats['total_cues']}" );

        if self.dry_run:
            self.logger.info( "✓ Dry run completed - no files modified" );

        return True;
