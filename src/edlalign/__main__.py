"""Allow running EDL Align with ``python -m edlalign``."""
from .cli import main

main();
