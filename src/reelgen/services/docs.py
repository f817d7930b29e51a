"""Render-engine documentation loader."""

import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def load_render_docs(path: Path) -> str:
    """Read the render-engine documentation once per path.

    Raises:
        FileNotFoundError: If the documentation file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Render-engine documentation not found: {path}")
    text = path.read_text(encoding="utf-8")
    logger.debug(f"Loaded render docs from {path} ({len(text)} chars)")
    return text
