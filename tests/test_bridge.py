"""Tests for PageBridge and the display text it renders."""

import json
import logging

import pytest

from pageprobe.bridge.bridge import BRIDGE_INSTALL_JS, BRIDGE_NAME, PageBridge
from pageprobe.core.session import CaptureSession
from pageprobe.core.types import PageSnapshot
from pageprobe.formatter.display import InfoDisplay
from pageprobe.formatter.formatter import INITIAL_PROMPT, format_capture, format_error


def make_bridge(**kwargs):
    session = CaptureSession()
    session.reset("https://example.com")
    display = InfoDisplay()
    return PageBridge(session, display, **kwargs), session, display


def snapshot(page: int) -> str:
    return PageSnapshot(page=page, title="Example Domain", url="https://example.com/").to_json()


class TestOnPageInfo:
    def test_first_capture(self):
        bridge, session, display = make_bridge()
        raw = snapshot(1)
        bridge.on_page_info(raw)

        assert session.capture_count == 1
        assert session.history == [raw]
        assert display.text == (
            "=== PAGE 1 ===\n\n"
            + raw
            + "\n\n[Captured pages: 1]\n"
            "[Navigate in the webpage, then click GET INFO to capture next page]\n"
            "[Click CLEAR to reset]"
        )

    def test_successive_captures_accumulate(self):
        bridge, session, display = make_bridge()
        bridge.on_page_info(snapshot(1))
        bridge.on_page_info(snapshot(2))

        assert session.capture_count == 2
        assert len(session.history) == 2
        assert display.text.startswith("=== PAGE 2 ===\n\n")
        assert "[Captured pages: 2]" in display.text

    def test_history_keeps_raw_text(self):
        bridge, session, _ = make_bridge()
        raw = json.dumps({"page": 1, "title": "t", "url": "u"})  # compact, not re-indented
        bridge.on_page_info(raw)
        assert session.history == [raw]

    def test_malformed_payload_is_rejected(self):
        bridge, session, display = make_bridge()
        bridge.on_page_info("not json at all")
        assert session.capture_count == 0
        assert display.text.startswith("Error: malformed page info")

    def test_non_string_payload_is_rejected(self):
        bridge, session, display = make_bridge()
        bridge.on_page_info({"page": 1})
        assert session.capture_count == 0
        assert display.text.startswith("Error: page info must be a string")

    def test_oversize_payload_is_rejected(self):
        bridge, session, display = make_bridge(max_payload_chars=10)
        bridge.on_page_info(snapshot(1))
        assert session.capture_count == 0
        assert "exceeds 10 characters" in display.text

    def test_every_call_counts_as_a_delivery(self):
        bridge, _, _ = make_bridge()
        bridge.on_page_info(snapshot(1))
        bridge.on_page_info("garbage")
        bridge.on_error("boom")
        assert bridge.deliveries == 3


class TestOnError:
    def test_error_message_displayed(self):
        bridge, session, display = make_bridge()
        bridge.on_error("boom")
        assert display.text == "Error: boom"
        assert session.capture_count == 0

    def test_error_does_not_touch_history(self):
        bridge, session, _ = make_bridge()
        bridge.on_page_info(snapshot(1))
        bridge.on_error("boom")
        assert session.capture_count == 1
        assert len(session.history) == 1

    @pytest.mark.parametrize("message", ["", None])
    def test_empty_message_uses_fallback(self, message):
        bridge, _, display = make_bridge()
        bridge.on_error(message)
        assert display.text == "Error: Unknown error"

    def test_long_message_truncated(self):
        bridge, _, display = make_bridge(max_error_chars=5)
        bridge.on_error("abcdefghij")
        assert display.text == "Error: abcde..."


class TestFormatting:
    def test_format_error(self):
        assert format_error("boom") == "Error: boom"

    def test_format_capture_footer(self):
        text = format_capture(7, "{}")
        assert text.splitlines()[0] == "=== PAGE 7 ==="
        assert text.endswith("[Click CLEAR to reset]")
        assert "\n\n[Captured pages: 7]\n" in text

    def test_display_starts_with_prompt_and_notifies(self):
        display = InfoDisplay()
        seen = []
        display.subscribe(seen.append)
        assert display.text == INITIAL_PROMPT
        display.show("Loading page...")
        assert seen == ["Loading page..."]


class TestInstallScript:
    def test_exposes_only_two_methods_under_fixed_name(self):
        assert f"window.{BRIDGE_NAME}" in BRIDGE_INSTALL_JS
        assert "onPageInfo:" in BRIDGE_INSTALL_JS
        assert "onError:" in BRIDGE_INSTALL_JS
        assert "Object.freeze" in BRIDGE_INSTALL_JS
        assert "__NAME__" not in BRIDGE_INSTALL_JS

    def test_captures_bindings_once_at_install(self):
        assert "const info = window.__pageprobeOnPageInfo;" in BRIDGE_INSTALL_JS
        assert "const error = window.__pageprobeOnError;" in BRIDGE_INSTALL_JS
        assert "window.__pageprobeOnPageInfo(" not in BRIDGE_INSTALL_JS


class TestTokens:
    def test_issued_token_is_claimed_once(self):
        bridge, _, _ = make_bridge()
        token = bridge.issue_token()
        bridge.on_page_info(snapshot(1), token)
        assert bridge.claim(token) is True
        assert bridge.claim(token) is False

    def test_error_call_carries_token(self):
        bridge, _, _ = make_bridge()
        token = bridge.issue_token()
        bridge.on_error("boom", token)
        assert bridge.claim(token) is True

    def test_unissued_token_never_claims(self):
        bridge, session, _ = make_bridge()
        token = bridge.issue_token()
        bridge.on_page_info(snapshot(1), "made-up")
        assert session.capture_count == 1
        assert bridge.claim(token) is False
        assert bridge.claim("made-up") is False

    def test_tokens_are_distinct(self):
        bridge, _, _ = make_bridge()
        assert bridge.issue_token() != bridge.issue_token()


class TestLogging:
    def test_empty_page_logged_as_such(self, caplog):
        bridge, _, _ = make_bridge()
        with caplog.at_level(logging.DEBUG, logger="pageprobe.bridge.bridge"):
            bridge.on_page_info(snapshot(1))
        assert "no interactive elements" in caplog.text

    def test_element_counts_logged(self, caplog):
        bridge, _, _ = make_bridge()
        raw = json.dumps({"page": 1, "title": "", "url": "", "inputs": [{}], "buttons": [{}, {}]})
        with caplog.at_level(logging.DEBUG, logger="pageprobe.bridge.bridge"):
            bridge.on_page_info(raw)
        assert "1 inputs, 2 buttons, 0 selects" in caplog.text
