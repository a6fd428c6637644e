from PIL import Image, ImageDraw
import pytest
import pytesseract

from livescroll.perception import (
    CaptionCaptureError,
    CaptionReader,
    RegionWatcher,
    capture_region,
    crop_region,
    images_differ,
)
from livescroll.perception import ocr
from livescroll.schemas.captions import ScreenRect


class TestScreenRect:

    def test_parse(self):
        rect = ScreenRect.parse("10, 20, 30, 40")
        assert rect.as_box() == (10, 20, 40, 60)

    def test_parse_rejects_wrong_arity(self):
        with pytest.raises(ValueError):
            ScreenRect.parse("1,2,3")

    def test_frozen(self):
        rect = ScreenRect(left=0, top=0, width=1, height=1)
        with pytest.raises(Exception):
            rect.left = 5

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            ScreenRect(left=-1, top=0, width=1, height=1)


class TestCrop:

    def test_crop_to_region(self, blank_screen, region):
        assert crop_region(blank_screen, region).size == (40, 10)

    def test_crop_clamped_to_screen(self, blank_screen):
        cropped = crop_region(blank_screen, ScreenRect(left=80, top=50, width=50, height=50))
        assert cropped.size == (20, 10)

    def test_region_outside_screen(self, blank_screen):
        with pytest.raises(ValueError):
            crop_region(blank_screen, ScreenRect(left=500, top=500, width=10, height=10))

    def test_capture_region_uses_grab(self, blank_screen, region):
        assert capture_region(region, grab=lambda: blank_screen).size == (40, 10)


class TestCaptionReader:

    def test_reads_text(self, monkeypatch, blank_screen, region):
        seen = []

        def fake_ocr(image, config=""):
            seen.append(image.size)
            return "  the quick brown fox \n"

        monkeypatch.setattr(ocr.pytesseract, "image_to_string", fake_ocr)
        reader = CaptionReader(grab=lambda: blank_screen)
        assert reader.read_sync(region) == "the quick brown fox"
        assert seen == [(40, 10)]

    async def test_read_is_awaitable(self, monkeypatch, blank_screen, region):
        monkeypatch.setattr(ocr.pytesseract, "image_to_string", lambda image, config="": "hello")
        reader = CaptionReader(grab=lambda: blank_screen)
        assert await reader(region) == "hello"

    def test_ocr_failure(self, monkeypatch, blank_screen, region):
        def missing(image, config=""):
            raise pytesseract.TesseractNotFoundError()

        monkeypatch.setattr(ocr.pytesseract, "image_to_string", missing)
        with pytest.raises(CaptionCaptureError):
            CaptionReader(grab=lambda: blank_screen).read_sync(region)

    def test_screenshot_failure(self, region):
        def broken():
            raise RuntimeError("no display")

        with pytest.raises(CaptionCaptureError):
            CaptionReader(grab=broken).read_sync(region)

    def test_empty_region(self, blank_screen):
        reader = CaptionReader(grab=lambda: blank_screen)
        with pytest.raises(CaptionCaptureError):
            reader.read_sync(ScreenRect(left=0, top=0, width=0, height=10))


class TestRegionWatcher:

    def test_images_differ(self, blank_screen):
        changed = blank_screen.copy()
        ImageDraw.Draw(changed).point((5, 5), fill="black")
        assert images_differ(None, blank_screen)
        assert not images_differ(blank_screen, blank_screen.copy())
        assert images_differ(blank_screen, changed)
        assert images_differ(blank_screen, Image.new("RGB", (10, 10)))

    async def test_signals_only_on_change(self, blank_screen, region):
        scrolled = blank_screen.copy()
        ImageDraw.Draw(scrolled).rectangle((10, 20, 30, 25), fill="black")
        frames = iter([blank_screen, blank_screen, scrolled, scrolled])

        watcher = RegionWatcher(region, interval=0.001, grab=lambda: next(frames), max_polls=4)
        signals = [bounds async for bounds in watcher]
        assert signals == [region, region]

    async def test_capture_errors_are_skipped(self, blank_screen, region):
        def broken():
            raise RuntimeError("no display")

        watcher = RegionWatcher(region, interval=0.001, grab=broken, max_polls=2)
        assert [bounds async for bounds in watcher] == []

    def test_invalid_interval(self, region):
        with pytest.raises(ValueError):
            RegionWatcher(region, interval=0)
