"""
main.py - Entry point for Live Scroll Transcript
"""

import argparse
import asyncio
import json
import sys

from livescroll.agent import LiveScrollService
from livescroll.config import load_settings
from livescroll.matching import CaptionMatcher
from livescroll.schemas.captions import MatchOutcome, ScreenRect
from livescroll.tree import load_tree
from livescroll.utils.logger import set_level


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live Scroll Transcript CLI")
    parser.add_argument("--config", type=str, default=None, help="Path to a YAML settings file")
    parser.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    match = sub.add_parser("match", help="Match one caption against a tree snapshot file")
    match.add_argument("caption", type=str, help="Caption text")
    match.add_argument("--tree", type=str, required=True, help="YAML/JSON tree snapshot")

    watch = sub.add_parser("watch", help="Follow on-screen captions in a Chrome page")
    watch.add_argument("--region", type=ScreenRect.parse, default=None,
                       help="Caption region as LEFT,TOP,WIDTH,HEIGHT")
    watch.add_argument("--cdp-url", type=str, default=None, help="Chrome DevTools endpoint")
    watch.add_argument("--threshold", type=int, default=None, help="Scrolls per caption round")
    watch.add_argument("--interval", type=float, default=None, help="Seconds between region polls")
    return parser


def run_match(caption: str, tree_path: str) -> int:
    provider = load_tree(tree_path)
    report = CaptionMatcher().scroll_to_text(caption, provider)
    print(json.dumps(report.to_dict(), indent=2))
    return 0 if report.outcome is MatchOutcome.MATCHED else 1


async def run_watch(settings) -> None:
    # Playwright and screen capture are only needed when watching
    from livescroll.perception import CaptionReader, RegionWatcher
    from livescroll.tree.browser import BrowserTreeProvider

    provider = BrowserTreeProvider(settings.cdp_url)
    if not await provider.connect():
        raise RuntimeError(f"Could not connect to Chrome at {settings.cdp_url}")

    reader = CaptionReader(tesseract_config=settings.tesseract_config)
    service = LiveScrollService(reader, provider, threshold=settings.scroll_threshold)
    watcher = RegionWatcher(settings.caption_region, interval=settings.poll_interval)
    try:
        await service.watch(watcher)
    finally:
        await provider.disconnect()


def main(argv=None):
    args = _build_parser().parse_args(argv)
    try:
        settings = load_settings(
            args.config,
            log_level=args.log_level,
            caption_region=getattr(args, "region", None),
            cdp_url=getattr(args, "cdp_url", None),
            scroll_threshold=getattr(args, "threshold", None),
            poll_interval=getattr(args, "interval", None),
        )
    except (OSError, ValueError) as e:
        print(f"Error loading settings: {e}")
        return 2
    set_level(settings.log_level)

    if args.command == "match":
        try:
            return run_match(args.caption, args.tree)
        except (OSError, ValueError) as e:
            print(f"Error loading tree: {e}")
            return 2

    if settings.caption_region is None:
        print("Error: a caption region is required (--region or caption_region in config)")
        return 2

    print(f"📜 Watching captions at {settings.caption_region.as_box()}")
    try:
        asyncio.run(run_watch(settings))
    except KeyboardInterrupt:
        print("\n🛑 Stopped by user.")
    except Exception as e:
        print(f"\n💥 Fatal error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
