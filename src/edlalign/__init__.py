"""
EDL Align - Subtitle to edit decision list alignment utility.

Snaps subtitle cue boundaries onto the cut points of an EDL, either
exactly (every boundary) or with minimal edits (1:1 matched boundaries only).
"""

__version__ = "0.1.0";
__author__ = "EDL Align Project";
__license__ = "MIT";
