"""
One-to-one matching of subtitle cues to cut points.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from .subtitles import SubtitleEntry


NO_MATCH = None;


def nearest_cut_index( cuts: Sequence[float], timestamp: float ) -> int:
    """
    Index of the cut closest to timestamp.

    Forward linear scan: the first cut reaching the minimum distance is kept
    and only replaced by a strictly closer one. Cuts must be non-empty.
    """
    best = 0;
    for idx in range( 1, len( cuts ) ):
        if abs( cuts[idx] - timestamp ) < abs( cuts[best] - timestamp ):
            best = idx;
    return best;


def nearest_cut( cuts: Sequence[float], timestamp: float ) -> float:
    """Cut time closest to timestamp (see nearest_cut_index)."""
    return cuts[ nearest_cut_index( cuts, timestamp ) ];


def build_one_to_one_map( cues: Sequence[SubtitleEntry], cuts: Sequence[float] ) -> List[Optional[int]]:
    """
    Assign each cue at most one cut, and each cut at most one cue.

    Every cue proposes its nearest cut. Proposals are processed by
    ascending distance: a free cut is taken, an owned cut is stolen only by
    a strictly closer cue. A cue that loses a contest, or whose cut is
    stolen, stays unmatched; there is no retry against other cuts.

    Args:
        cues: Subtitle entries in file order
        cuts: Ascending cut times in seconds

    Returns:
        List indexed by cue position holding a cut position or NO_MATCH
    """
    cue_to_cut: List[Optional[int]] = [ NO_MATCH ] * len( cues );
    if not cuts:
        return cue_to_cut;

    candidates: List[Tuple[float, int, int]] = [];
    for cue_pos, cue in enumerate( cues ):
        cut_pos = nearest_cut_index( cuts, cue.start );
        candidates.append( ( abs( cuts[cut_pos] - cue.start ), cue_pos, cut_pos ) );

    # Stable sort: equal distances keep cue order
    candidates.sort( key=lambda candidate: candidate[0] );

    cut_owner: Dict[int, Tuple[int, float]] = {};  # cut_pos -> (cue_pos, distance)
    for distance, cue_pos, cut_pos in candidates:
        if cut_pos not in cut_owner:
            cue_to_cut[cue_pos] = cut_pos;
            cut_owner[cut_pos] = ( cue_pos, distance );
            continue;

        owner_pos, owner_distance = cut_owner[cut_pos];
        if distance < owner_distance:
            cue_to_cut[owner_pos] = NO_MATCH;
            cue_to_cut[cue_pos] = cut_pos;
            cut_owner[cut_pos] = ( cue_pos, distance );

    return cue_to_cut;


def count_matches( cue_to_cut: Sequence[Optional[int]] ) -> int:
    """Number of cues holding a cut."""
    return sum( 1 for cut_pos in cue_to_cut if cut_pos is not NO_MATCH );
