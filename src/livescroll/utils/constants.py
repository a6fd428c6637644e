"""Shared constants for caption matching and page scrolling."""

# Shown to the user when a unique match was found but could not be shown.
TRY_REFRESH = "found matching text but failed to scroll; try reloading"

# Caption view scrolls that should happen before searching for new caption text.
DEFAULT_SCROLL_THRESHOLD = 2

DEFAULT_CDP_URL = "http://127.0.0.1:9222"

# Attribute stamped on snapshotted DOM elements so a node can find its element again.
NODE_ID_ATTRIBUTE = "data-livescroll-id"

# Shared JS that walks document.body and returns a nested tree of
# {id, text, label, children}. Text is the element's own text (direct text
# node children only) so a paragraph and its container do not both claim it.
# Browser tree snapshot and scroll code MUST agree on NODE_ID_ATTRIBUTE.
SNAPSHOT_TREE_JS = (
    "const _attr = '" + NODE_ID_ATTRIBUTE + "';\n"
    """
    let _next = 0;
    function _ownText(el) {
        let t = '';
        for (const n of el.childNodes) {
            if (n.nodeType === Node.TEXT_NODE) t += n.textContent;
        }
        return t.trim();
    }
    function _label(el) {
        return (el.getAttribute('aria-label') || el.getAttribute('alt')
                || el.getAttribute('title') || '').trim();
    }
    function _walk(el) {
        if (el.tagName === 'SCRIPT' || el.tagName === 'STYLE' || el.tagName === 'NOSCRIPT') {
            return null;
        }
        const id = String(_next++);
        el.setAttribute(_attr, id);
        const children = [];
        for (const child of el.children) {
            const node = _walk(child);
            if (node) children.push(node);
        }
        return {id: id, text: _ownText(el) || null, label: _label(el) || null, children: children};
    }
    const tree = document.body ? _walk(document.body) : null;
"""
)

SCROLL_INTO_VIEW_JS = (
    "(id) => {\n"
    "    const el = document.querySelector('[" + NODE_ID_ATTRIBUTE + "=\"' + id + '\"]');\n"
    """
    if (!el) return false;
    el.scrollIntoView({block: 'center', inline: 'nearest'});
    return true;
}"""
)

# Recent round reports kept by a running service.
DEFAULT_HISTORY_SIZE = 100
