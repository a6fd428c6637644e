"""
browser.py - Chrome page as an element tree
===========================================
Connects to Chrome via CDP (Chrome DevTools Protocol) and snapshots the
page's DOM into SnapshotNodes: each element keeps its own text, and its
aria-label / alt / title as label. Showing a node scrolls its element into
view.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from playwright.async_api import Browser, Page, async_playwright

from ..utils.constants import DEFAULT_CDP_URL, SCROLL_INTO_VIEW_JS, SNAPSHOT_TREE_JS
from ..utils.logger import get_logger
from .base import ElementNode, TreeProvider
from .snapshot import SnapshotNode, SnapshotTree, tree_from_dict

logger = get_logger(__name__)


class BrowserTreeProvider(TreeProvider):
    """TreeProvider over the active tab of a Chrome instance."""

    def __init__(self, cdp_url: str = DEFAULT_CDP_URL):
        self.cdp_url = cdp_url
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None
        self._tree = SnapshotTree(None)

    @property
    def connected(self) -> bool:
        return self._page is not None

    async def connect(self, retries: int = 5, delay: float = 1.0) -> bool:
        """
        Connect to Chrome via CDP with retry logic.

        Args:
            retries: Number of connection attempts
            delay: Initial delay between retries (doubles each time)
        """
        for attempt in range(retries):
            try:
                if self._playwright is None:
                    self._playwright = await async_playwright().start()
                self._browser = await self._playwright.chromium.connect_over_cdp(self.cdp_url)

                # Get the first page (active tab)
                contexts = self._browser.contexts
                if contexts and contexts[0].pages:
                    self._page = contexts[0].pages[0]
                    logger.info("CDP connected on attempt %d", attempt + 1)
                    return True
            except Exception as e:
                if attempt == retries - 1:
                    logger.error("CDP connection failed after %d attempts: %s", retries, e)
                    return False

            # Browser not reachable yet, or connected with no pages
            if attempt < retries - 1:
                await asyncio.sleep(delay)
                delay *= 2  # Exponential backoff

        return False

    async def snapshot(self) -> None:
        """Replace the current tree with a fresh snapshot of the page."""
        if not self._page:
            raise RuntimeError("Chrome not connected")
        data = await self._page.evaluate("(() => {" + SNAPSHOT_TREE_JS + "return tree; })()")
        if self._tree.outstanding:
            logger.warning("Dropping snapshot with %d borrowed nodes", len(self._tree.outstanding))
        self._tree = tree_from_dict(data, on_show=self._show)

    def root(self) -> Optional[SnapshotNode]:
        return self._tree.root()

    def release(self, node: ElementNode) -> None:
        self._tree.release(node)

    async def scroll_into_view(self, node_id: str) -> Dict[str, Any]:
        """Scroll the element stamped with `node_id` into view."""
        try:
            found = await self._page.evaluate(SCROLL_INTO_VIEW_JS, node_id)
            if not found:
                return {"success": False, "error": f"Element {node_id} no longer on page"}
            return {"success": True, "id": node_id}
        except Exception as e:
            return {"success": False, "error": str(e)}

    def _show(self, node: SnapshotNode) -> bool:
        """Sync wrapper used by SnapshotNode.show_on_screen()."""
        if not self._page or node.node_id is None:
            return False
        # Allow nested event loops: rounds run inside the service's loop
        import nest_asyncio
        nest_asyncio.apply()
        result = asyncio.run(self.scroll_into_view(node.node_id))
        if not result["success"]:
            logger.warning("Scroll failed: %s", result.get("error"))
        return result["success"]

    async def disconnect(self) -> None:
        """Clean up connection."""
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()
        self._page = None
        self._browser = None
        self._playwright = None
