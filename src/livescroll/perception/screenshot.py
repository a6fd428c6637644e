"""
Screenshot capture for Live Scroll Transcript.
Grabs the screen and crops it to the caption region.
"""

from __future__ import annotations

from typing import Callable, Optional

from PIL import Image

try:
    from PIL import ImageGrab
except ImportError:
    ImageGrab = None

from ..schemas.captions import ScreenRect

GrabFn = Callable[[], Image.Image]


def capture_screenshot() -> Image.Image:
    """
    Capture a screenshot of the current desktop.

    Uses PIL.ImageGrab where the platform supports it and falls back to
    PyAutoGUI (which shells out to scrot/gnome-screenshot on Linux).

    Raises:
        RuntimeError: If no screenshot backend works.
    """
    if ImageGrab is not None:
        try:
            return ImageGrab.grab()
        except OSError:
            pass  # Fall through to PyAutoGUI

    try:
        import pyautogui
        return pyautogui.screenshot()
    except Exception as e:
        raise RuntimeError(f"Failed to capture screenshot: {e}") from e


def crop_region(image: Image.Image, region: ScreenRect) -> Image.Image:
    """Crop `image` to `region`, clamped to the image bounds."""
    left = min(region.left, image.width)
    top = min(region.top, image.height)
    right = min(region.right, image.width)
    bottom = min(region.bottom, image.height)
    if right <= left or bottom <= top:
        raise ValueError(f"Caption region {region.as_box()} is outside the screenshot "
                         f"({image.width}x{image.height})")
    return image.crop((left, top, right, bottom))


def capture_region(region: ScreenRect, grab: Optional[GrabFn] = None) -> Image.Image:
    """Screenshot the desktop and return only the caption region."""
    screenshot = (grab or capture_screenshot)()
    return crop_region(screenshot, region)


def save_screenshot(image: Image.Image, path: str) -> None:
    """Save a screenshot to the specified path."""
    image.save(path)
