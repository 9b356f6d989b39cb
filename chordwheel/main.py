"""Highlighter factory — wires settings, logging, a raster surface and the engine."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from chordwheel.config import Settings, settings as default_settings
from chordwheel.engine.config import HighlightConfig, Strategy
from chordwheel.engine.highlighter import ChordHighlighter
from chordwheel.models.style import HighlightStyle
from chordwheel.surface import RasterSurface

load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or default_settings
    logging.basicConfig(
        level=getattr(logging, settings.chordwheel_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def create_highlighter(
    settings: Settings | None = None,
    style: HighlightStyle | None = None,
) -> ChordHighlighter:
    """Build a highlighter drawing on a fresh ``RasterSurface``."""
    settings = settings or default_settings
    configure_logging(settings)

    size = settings.chordwheel_canvas_size
    config = HighlightConfig(
        canvas_width=size,
        canvas_height=size,
        center=(size / 2, size / 2),
        strategy=Strategy(settings.chordwheel_strategy.lower()),
    )
    surface = RasterSurface(size, size)
    logger.info(
        "Highlighter ready: %dx%d canvas, %s strategy (%s)",
        size,
        size,
        config.strategy.value,
        settings.chordwheel_env,
    )
    return ChordHighlighter(surface, config=config, style=style)
