"""Perception module for Live Scroll Transcript."""

from .ocr import CaptionCaptureError, CaptionReader, get_text_from_image
from .region_watcher import RegionWatcher, images_differ
from .screenshot import capture_region, capture_screenshot, crop_region, save_screenshot

__all__ = [
    "CaptionCaptureError",
    "CaptionReader",
    "RegionWatcher",
    "capture_region",
    "capture_screenshot",
    "crop_region",
    "get_text_from_image",
    "images_differ",
    "save_screenshot",
]
