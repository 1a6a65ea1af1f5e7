"""
Shared test setup: route log files into a temporary directory.
"""
import os
import sys
import tempfile
from pathlib import Path

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

os.environ.setdefault( "EDLALIGN_LOG_DIR", tempfile.mkdtemp( prefix="edlalign-logs-" ) );

from edlalign.logging import get_logger

# Create the shared logger before any test patches pathlib
get_logger();
