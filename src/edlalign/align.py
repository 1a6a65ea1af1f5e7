"""
Timeline rebuilding: snaps subtitle cue boundaries onto EDL cut points.
"""
from enum import Enum
from typing import List, Optional, Sequence

from .match import NO_MATCH, build_one_to_one_map, nearest_cut
from .subtitles import SubtitleEntry
from .timecode import ONE_MS


class AlignMode( str, Enum ):
    """Alignment policy."""

    STRICT = "strict";    # every boundary snaps to its nearest cut
    MINIMAL = "minimal";  # only 1:1 matched boundaries move


def _floor_end( start: float, end: float ) -> float:
    if end <= start:
        return start + ONE_MS;
    return end;


def strict_align( cues: Sequence[SubtitleEntry], cuts: Sequence[float] ) -> List[SubtitleEntry]:
    """
    Exact-snap alignment.

    The first cue starts on the cut nearest its original start; every later
    cue starts where the previous one ends. A cue ends one millisecond after
    the cut nearest the next cue's original start, and the last cue keeps
    its original duration. Several cues may snap to the same cut.

    Args:
        cues: Subtitle entries in file order
        cuts: Cut times in seconds

    Returns:
        New list of aligned entries, or the cues unchanged when there are no cuts
    """
    if not cuts:
        return list( cues );

    cuts = sorted( cuts );
    aligned: List[SubtitleEntry] = [];

    for i, cue in enumerate( cues ):
        start = nearest_cut( cuts, cue.start ) if i == 0 else aligned[i - 1].end;

        if i + 1 < len( cues ):
            end = nearest_cut( cuts, cues[i + 1].start ) + ONE_MS;
        else:
            end = start + cue.duration;

        aligned.append( cue.with_times( start, _floor_end( start, end ) ) );

    return aligned;


def minimal_align( cues: Sequence[SubtitleEntry], cuts: Sequence[float], cue_to_cut: Optional[List[Optional[int]]] = None ) -> List[SubtitleEntry]:
    """
    Minimal-edit alignment.

    Boundaries move only where build_one_to_one_map found a cut for the
    following cue; otherwise the cue keeps its original duration. The first
    cue starts on its matched cut, or at its original start when unmatched.
    Cues are chained end to start as in strict_align.

    Args:
        cues: Subtitle entries in file order
        cuts: Ascending cut times in seconds
        cue_to_cut: Precomputed mapping; built from cues and cuts when omitted

    Returns:
        New list of aligned entries
    """
    if cue_to_cut is None:
        cue_to_cut = build_one_to_one_map( cues, cuts );

    aligned: List[SubtitleEntry] = [];
    prev_end = None;

    for i, cue in enumerate( cues ):
        if i == 0:
            cut_pos = cue_to_cut[i];
            start = cuts[cut_pos] if cut_pos is not NO_MATCH else cue.start;
        else:
            start = prev_end;

        next_pos = cue_to_cut[i + 1] if i + 1 < len( cues ) else NO_MATCH;
        if next_pos is not NO_MATCH:
            end = cuts[next_pos] + ONE_MS;
        else:
            end = start + cue.duration;

        end = _floor_end( start, end );
        aligned.append( cue.with_times( start, end ) );
        prev_end = end;

    return aligned;


def align( cues: Sequence[SubtitleEntry], cuts: Sequence[float], mode="strict" ) -> List[SubtitleEntry]:
    """Run the alignment policy named by mode ("strict" or "minimal")."""
    mode = AlignMode( mode );
    if mode is AlignMode.STRICT:
        return strict_align( cues, cuts );
    return minimal_align( cues, cuts );


def calculate_shift_stats( original: Sequence[SubtitleEntry], aligned: Sequence[SubtitleEntry] ) -> dict:
    """Summarize how far cue starts moved."""
    if not original:
        return {};

    shifts = [ abs( new.start - old.start ) for old, new in zip( original, aligned ) ];

    return {
        'total_cues': len( original ),
        'moved_cues': sum( 1 for shift in shifts if shift >= ONE_MS / 2 ),
        'avg_shift': sum( shifts ) / len( shifts ),
        'max_shift': max( shifts )
    };
