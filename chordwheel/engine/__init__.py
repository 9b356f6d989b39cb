"""Circle of fifths highlight engine."""

from chordwheel.engine.config import HighlightConfig, Strategy
from chordwheel.engine.highlighter import ChordHighlighter
from chordwheel.engine.positions import Position, Ring, find_position

__all__ = [
    "ChordHighlighter",
    "HighlightConfig",
    "Strategy",
    "Position",
    "Ring",
    "find_position",
]
