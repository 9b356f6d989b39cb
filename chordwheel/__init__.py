"""chordwheel — chord highlighting for a circle-of-fifths diagram."""

__version__ = "0.1.0"
