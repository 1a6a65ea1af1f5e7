"""
Test cases for EDL cut point extraction.
"""
import pytest
from pathlib import Path
import sys

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from edlalign.edl import extract_cuts, read_edl_file


SAMPLE_EDL = """TITLE: REEL_01
FCM: NON-DROP FRAME

001  AX       V     C        00:00:10:00 00:00:15:00 01:00:00:00 01:00:05:00
* FROM CLIP NAME: shot_a.mov

002  AX       V     C        00:01:00:00 00:01:05:30 01:00:05:00 01:00:10:30
* FROM CLIP NAME: shot_b.mov

003  AX       V     C        00:02:00:00 00:02:02:00 01:00:10:30 01:00:12:00
""";


class TestExtractCuts:
    """Test cut extraction from EDL lines."""

    def test_record_timecodes_are_cuts( self ):
        """Test only the 3rd and 4th timecodes of an event are used."""
        cuts = extract_cuts( SAMPLE_EDL.splitlines(), 60 );
        assert cuts == ( 3600.0, 3605.0, 3610.5, 3612.0 );

    def test_repeated_timecodes_collapse( self ):
        """Test the same timecode string across events gives one cut."""
        lines = [
            "001  AX V C 00:00:00:00 00:00:01:00 00:00:01:00 00:00:02:00",
            "002  AX V C 00:00:05:00 00:00:06:00 00:00:02:00 00:00:03:00",
            "003  AX V C 00:00:09:00 00:00:10:00 00:00:01:00 00:00:02:00"
        ];
        assert extract_cuts( lines, 60 ) == ( 1.0, 2.0, 3.0 );

    def test_dedup_by_timecode_string( self ):
        """Test different timecodes with the same time in seconds are both kept."""
        lines = [ "001  AX V C 00:00:00:00 00:00:01:00 00:00:01:60 00:00:02:00" ];
        assert extract_cuts( lines, 60 ) == ( 2.0, 2.0 );

    def test_sorted_ascending( self ):
        """Test out-of-order events still produce ascending cuts."""
        lines = [
            "002  AX V C 00:00:00:00 00:00:01:00 00:10:00:00 00:10:01:00",
            "001  AX V C 00:00:00:00 00:00:01:00 00:00:02:00 00:00:03:00"
        ];
        assert extract_cuts( lines, 25 ) == ( 2.0, 3.0, 600.0, 601.0 );

    def test_lines_without_four_timecodes_ignored( self ):
        """Test lines with fewer or more than four timecodes are skipped."""
        lines = [
            "00:00:01:00 00:00:02:00",
            "00:00:01:00 00:00:02:00 00:00:03:00",
            "00:00:01:00 00:00:02:00 00:00:03:00 00:00:04:00 00:00:05:00",
            "no timecodes here"
        ];
        assert extract_cuts( lines, 30 ) == ();

    def test_frames_use_fps( self ):
        """Test the frame field is divided by the frame rate."""
        lines = [ "001 AX V C 00:00:00:00 00:00:01:00 00:00:01:12 00:00:02:00" ];
        assert extract_cuts( lines, 24 ) == ( 1.5, 2.0 );

    def test_invalid_fps_defaults_to_60( self ):
        """Test a missing or invalid frame rate uses 60 fps."""
        lines = [ "001 AX V C 00:00:00:00 00:00:01:00 00:00:01:30 00:00:02:00" ];
        assert extract_cuts( lines ) == ( 1.5, 2.0 );
        assert extract_cuts( lines, "abc" ) == ( 1.5, 2.0 );
        assert extract_cuts( lines, 0 ) == ( 1.5, 2.0 );

    def test_empty_input( self ):
        """Test no lines give no cuts."""
        assert extract_cuts( [], 60 ) == ();


class TestReadEdlFile:
    """Test reading EDL files from disk."""

    def test_read_file_with_crlf( self, tmp_path ):
        """Test Windows line endings are handled."""
        edl_file = tmp_path / "cut.edl";
        edl_file.write_bytes( SAMPLE_EDL.replace( "\n", "\r\n" ).encode( "utf-8" ) );

        assert read_edl_file( edl_file, 60 ) == ( 3600.0, 3605.0, 3610.5, 3612.0 );

    def test_missing_file( self, tmp_path ):
        """Test a missing EDL raises FileNotFoundError."""
        with pytest.raises( FileNotFoundError ):
            read_edl_file( tmp_path / "missing.edl", 60 );


if __name__ == '__main__':
    pytest.main( [ __file__ ] );
