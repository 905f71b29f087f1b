"""Interactive-element extractor: inputs, buttons and selects."""

from __future__ import annotations

import logging

from pageprobe.bridge.bridge import BRIDGE_NAME
from pageprobe.extractors.base import BaseExtractor, ScriptTarget

logger = logging.getLogger(__name__)

STATUS_DELIVERED = "delivered"
STATUS_ERROR = "error"
STATUS_NO_BRIDGE = "no-bridge"

_BUTTON_SELECTOR = 'button, a[role="button"], input[type="submit"], input[type="button"]'

# Read-only over the DOM. Exactly one bridge call per run: onPageInfo when the
# snapshot serializes, onError otherwise. A failure inside onPageInfo itself
# is not reported a second time. The token tags the call so the host can tell
# which invocation it belongs to.
_EXTRACTION_JS = """async ({ page: pageNumber, token }) => {
    const bridge = window.__BRIDGE__;
    if (!bridge) return '__NO_BRIDGE__';

    function str(v) {
        return typeof v === 'string' ? v : '';
    }

    function className(el) {
        if (typeof el.className === 'string') return el.className;
        return el.getAttribute('class') || '';
    }

    let payload;
    try {
        const inputs = Array.from(document.querySelectorAll('input'));
        const buttons = Array.from(document.querySelectorAll('__BUTTONS__'));
        const selects = Array.from(document.querySelectorAll('select'));

        const info = {
            page: pageNumber,
            title: document.title,
            url: window.location.href,
            inputs: inputs.map(i => ({
                type: str(i.type) || 'text',
                placeholder: str(i.placeholder),
                name: str(i.name),
                id: str(i.id),
                value: str(i.value),
            })),
            buttons: buttons.map(b => ({
                text: (b.innerText || b.value || b.textContent || '').trim(),
                id: str(b.id),
                className: className(b),
            })),
            selects: selects.map(s => ({
                name: str(s.name),
                id: str(s.id),
                options: Array.from(s.options).map(o => o.text),
            })),
        };
        payload = JSON.stringify(info, null, 2);
    } catch (e) {
        await bridge.onError((e && e.message) || 'Unknown error', token);
        return '__ERROR__';
    }
    await bridge.onPageInfo(payload, token);
    return '__DELIVERED__';
}""" \
    .replace("__BRIDGE__", BRIDGE_NAME) \
    .replace("__BUTTONS__", _BUTTON_SELECTOR) \
    .replace("__NO_BRIDGE__", STATUS_NO_BRIDGE) \
    .replace("__ERROR__", STATUS_ERROR) \
    .replace("__DELIVERED__", STATUS_DELIVERED)


class InteractiveExtractor(BaseExtractor):
    """
    Serializes a page's inputs, buttons and selects into PageSnapshot JSON.

    The page number and the invocation token are the only host state the
    script sees; both arrive as the evaluate argument.
    """

    script = _EXTRACTION_JS

    async def run(self, target: ScriptTarget, page_number: int, token: str = "") -> str:
        status = await target.evaluate(self.script, {"page": page_number, "token": token})
        logger.debug("Extractor for page %d finished: %s", page_number, status)
        return str(status)
