"""
Subtitle processing module for parsing and writing SRT files.
"""
import io
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Sequence
import pysrt

from .timecode import seconds_to_subrip_time, subrip_time_to_seconds
from .logging import get_logger


@dataclass( frozen=True )
class SubtitleEntry:
    """Represents a single subtitle cue with timing and text."""

    index: int;       # Subtitle index number as found in the file
    start: float;     # Start time in seconds
    end: float;       # End time in seconds
    content: str;     # Cue text, kept verbatim (may be multi-line)

    @property
    def duration( self ) -> float:
        return self.end - self.start;

    def with_times( self, start: float, end: float ) -> "SubtitleEntry":
        """Return a copy with new timing; index and content are unchanged."""
        return replace( self, start=start, end=end );

    def __repr__( self ):
        return f"SubtitleEntry(index={self.index}, start={self.start:.3f}s, end={self.end:.3f}s, text='{self.content[:30]}...')";


class SubtitleProcessor:
    """
    SRT subtitle reader and writer.

    Cues keep their file order, which is also the alignment order.
    """

    def __init__( self ):
        self.logger = get_logger();
        self.subtitle_entries: List[SubtitleEntry] = [];

    def validate_subtitle_file( self, subtitle_file: Path ) -> bool:
        """
        Validate subtitle file format and existence.

        Args:
            subtitle_file: Path to subtitle file

        Returns:
            True if valid SRT file, False otherwise
        """
        if not subtitle_file.exists():
            self.logger.error( f"Subtitle file not found: {subtitle_file}" );
            return False;

        if subtitle_file.suffix.lower() != '.srt':
            self.logger.error( f"Only .srt files are supported, got: {subtitle_file.suffix}" );
            return False;

        return True;

    def _entries_from_subrip( self, subs: pysrt.SubRipFile ) -> List[SubtitleEntry]:
        return [
            SubtitleEntry(
                index=sub.index,
                start=subrip_time_to_seconds( sub.start ),
                end=subrip_time_to_seconds( sub.end ),
                content=sub.text
            )
            for sub in subs
        ];

    def parse_subtitle_text( self, text: str ) -> List[SubtitleEntry]:
        """Parse SRT text into SubtitleEntry objects."""
        subs = pysrt.from_string( text.replace( "\r", "" ) );
        self.subtitle_entries = self._entries_from_subrip( subs );
        return self.subtitle_entries;

    def parse_subtitle_file( self, subtitle_file: Path ) -> List[SubtitleEntry]:
        """
        Parse SRT subtitle file into SubtitleEntry objects.

        Args:
            subtitle_file: Path to SRT file

        Returns:
            List of SubtitleEntry objects (empty on failure)
        """
        subtitle_file = Path( subtitle_file );
        if not self.validate_subtitle_file( subtitle_file ):
            return [];

        self.logger.info( f"Parsing subtitle file: {subtitle_file}" );

        try:
            subs = pysrt.open( str( subtitle_file ) );
            self.subtitle_entries = self._entries_from_subrip( subs );
        except Exception as e:
            self.logger.error( f"Failed to parse subtitle file: {e}" );
            return [];

        self.logger.info( f"Parsed {len( self.subtitle_entries )} subtitle entries" );
        return self.subtitle_entries;

    def to_subrip_file( self, entries: Sequence[SubtitleEntry] ) -> pysrt.SubRipFile:
        """Build a pysrt file from subtitle entries, keeping their order."""
        items = [
            pysrt.SubRipItem(
                index=entry.index,
                start=seconds_to_subrip_time( entry.start ),
                end=seconds_to_subrip_time( entry.end ),
                text=entry.content
            )
            for entry in entries
        ];
        return pysrt.SubRipFile( items=items, eol="\n" );

    def compose_subtitles( self, entries: Sequence[SubtitleEntry] ) -> str:
        """
        Render subtitle entries as SRT text.

        Each block is "index\\nstart --> end\\ncontent\\n", blocks are
        separated by a blank line.
        """
        buffer = io.StringIO();
        self.to_subrip_file( entries ).write_into( buffer );
        return buffer.getvalue();

    def save_subtitle_file( self, entries: Sequence[SubtitleEntry], output_file: Path ) -> Path:
        """
        Write subtitle entries to an SRT file (UTF-8).

        Args:
            entries: Aligned subtitle entries
            output_file: Destination path

        Returns:
            Path to the written file
        """
        output_file = Path( output_file );
        output_file.parent.mkdir( parents=True, exist_ok=True );

        self.to_subrip_file( entries ).save( str( output_file ), encoding='utf-8' );
        self.logger.debug( f"Wrote {len( entries )} subtitle entries to {output_file}" );

        return output_file;

    def get_subtitle_stats( self ) -> Dict:
        """Get statistics about the loaded subtitle file."""
        if not self.subtitle_entries:
            return {};

        durations = [ entry.duration for entry in self.subtitle_entries ];

        return {
            'total_entries': len( self.subtitle_entries ),
            'first_start': self.subtitle_entries[0].start,
            'last_end': self.subtitle_entries[-1].end,
            'avg_duration': sum( durations ) / len( durations )
        };
