"""
Time conversion between SRT timestamps, EDL timecodes and float seconds.
"""
import math

import pysrt
from pysrt.srtexc import InvalidTimeString


ONE_MS = 0.001;  # One millisecond in seconds
DEFAULT_FPS = 60;


def srt_time_to_seconds( timestamp_str: str ) -> float:
    """
    Parse an SRT timestamp into seconds.

    Args:
        timestamp_str: String like "00:01:23,456"

    Returns:
        H*3600 + M*60 + S + mmm/1000
    """
    try:
        srt_time = pysrt.SubRipTime.from_string( timestamp_str.strip() );
    except ( InvalidTimeString, ValueError ) as e:
        raise ValueError( f"Invalid timestamp format: {timestamp_str}" ) from e;

    return subrip_time_to_seconds( srt_time );


def subrip_time_to_seconds( srt_time: pysrt.SubRipTime ) -> float:
    """Convert a pysrt time to seconds."""
    return (
        srt_time.hours * 3600 +
        srt_time.minutes * 60 +
        srt_time.seconds +
        srt_time.milliseconds / 1000.0
    );


def seconds_to_subrip_time( seconds: float ) -> pysrt.SubRipTime:
    """
    Convert seconds to a pysrt time.

    Hours, minutes and seconds are floored; milliseconds are the fractional
    remainder rounded half up. A remainder that rounds to 1000 carries into
    the seconds field.
    """
    whole = math.floor( seconds );
    millisecs = int( math.floor( ( seconds - whole ) * 1000 + 0.5 ) );
    total_ms = int( whole ) * 1000 + millisecs;

    hours, remainder = divmod( total_ms, 3600 * 1000 );
    minutes, remainder = divmod( remainder, 60 * 1000 );
    secs, millisecs = divmod( remainder, 1000 );

    return pysrt.SubRipTime( hours, minutes, secs, millisecs );


def seconds_to_srt_time( seconds: float ) -> str:
    """
    Format seconds as a zero-padded SRT timestamp ("HH:MM:SS,mmm").

    The hours field is not wrapped at 24.
    """
    return str( seconds_to_subrip_time( seconds ) );


def normalize_fps( fps ) -> float:
    """Return fps as a positive finite number, falling back to DEFAULT_FPS."""
    try:
        value = float( fps );
    except ( TypeError, ValueError ):
        return DEFAULT_FPS;

    if not math.isfinite( value ) or value <= 0:
        return DEFAULT_FPS;

    return value;


def timecode_to_seconds( timecode: str, fps: float ) -> float:
    """
    Convert an EDL timecode ("HH:MM:SS:FF") to seconds at the given frame rate.

    Args:
        timecode: Two-digit fields separated by colons
        fps: Frames per second

    Returns:
        H*3600 + M*60 + S + F/fps
    """
    hours, minutes, seconds, frames = ( int( part ) for part in timecode.split( ":" ) );
    return hours * 3600 + minutes * 60 + seconds + frames / fps;
