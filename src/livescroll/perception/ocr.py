"""
ocr.py - Caption text recognition
=================================
Reads the current caption text out of the caption region using Tesseract.
Screen capture and recognition run in a worker thread, so a caption
snapshot is requested with `await reader.read(region)`.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from PIL import Image
import pytesseract

from ..schemas.captions import ScreenRect
from ..utils.logger import get_logger
from .screenshot import GrabFn, capture_region

logger = get_logger(__name__)


class CaptionCaptureError(RuntimeError):
    """The caption snapshot (screenshot or OCR) failed."""


def get_text_from_image(image: Image.Image, config: str = "") -> str:
    """Extract all text from a PIL image using Tesseract."""
    try:
        return pytesseract.image_to_string(image, config=config).strip()
    except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as e:
        raise CaptionCaptureError(f"OCR failed: {e}") from e


class CaptionReader:
    """Caption snapshot source: screenshot -> crop to region -> OCR."""

    def __init__(self, grab: Optional[GrabFn] = None, tesseract_config: str = ""):
        self._grab = grab
        self._config = tesseract_config

    def read_sync(self, region: ScreenRect) -> str:
        if region.is_empty():
            raise CaptionCaptureError("Caption region is empty")
        try:
            image = capture_region(region, self._grab)
        except (RuntimeError, ValueError, OSError) as e:
            logger.warning("Screenshot failed: %s", e)
            raise CaptionCaptureError(f"Screenshot failed: {e}") from e
        return get_text_from_image(image, self._config)

    async def read(self, region: ScreenRect) -> str:
        """Return the caption text currently shown in `region`."""
        return await asyncio.to_thread(self.read_sync, region)

    __call__ = read
