"""
Edit decision list parsing: extracts record-side cut points in seconds.
"""
import re
from pathlib import Path
from typing import Iterable, Tuple

from .timecode import normalize_fps, timecode_to_seconds
from .logging import get_logger


TIMECODE_RE = re.compile( r'\d{2}:\d{2}:\d{2}:\d{2}' );
EVENT_TIMECODES = 4;  # source in/out + record in/out


def extract_cuts( lines: Iterable[str], fps=None ) -> Tuple[float, ...]:
    """
    Extract sorted, deduplicated cut points from EDL lines.

    A line counts as an edit event only when it holds exactly four
    timecodes; its record in/out (3rd and 4th) become cut candidates.
    Timecodes are deduplicated and sorted as strings before conversion,
    which matches numeric order because every field is two digits wide.

    Args:
        lines: EDL text lines
        fps: Frame rate; missing or invalid values fall back to 60

    Returns:
        Ascending tuple of cut times in seconds
    """
    fps = normalize_fps( fps );
    timecodes = set();

    for line in lines:
        found = TIMECODE_RE.findall( line );
        if len( found ) == EVENT_TIMECODES:
            timecodes.add( found[2] );
            timecodes.add( found[3] );

    return tuple( timecode_to_seconds( tc, fps ) for tc in sorted( timecodes ) );


def read_edl_file( edl_file: Path, fps=None ) -> Tuple[float, ...]:
    """
    Read an EDL file and extract its cut points.

    Args:
        edl_file: Path to EDL file
        fps: Frame rate used for the frame field

    Returns:
        Ascending tuple of cut times in seconds
    """
    logger = get_logger();
    edl_file = Path( edl_file );

    if not edl_file.exists():
        raise FileNotFoundError( f"EDL file not found: {edl_file}" );

    text = edl_file.read_text( encoding="utf-8", errors="replace" );
    cuts = extract_cuts( text.splitlines(), fps );

    logger.debug( f"Read {len( cuts )} cut points from {edl_file.name} at {normalize_fps( fps )} fps" );
    if not cuts:
        logger.warning( f"No edit events with four timecodes found in {edl_file}" );

    return cuts;
