"""Tests for the command-line front end, driven against a mocked host."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from pageprobe.cli import (
    EXIT_EXTRACTION_ERROR,
    EXIT_INVALID_URL,
    EXIT_OK,
    build_parser,
    format_history,
    handle_line,
    run_once,
)
from pageprobe.config import ProbeConfig
from pageprobe.core.host import CaptureHost
from pageprobe.core.types import PageSnapshot


def make_host(deliver: bool = True):
    browser = MagicMock()
    browser.load = MagicMock()
    browser.load_blank = AsyncMock()
    browser.clear_history = AsyncMock()
    browser.ensure_bridge = AsyncMock()
    browser.evaluate = AsyncMock()
    extractor = MagicMock()
    host = CaptureHost(
        browser,
        config=ProbeConfig(new_url_delay_ms=0, repeat_delay_ms=0),
        extractor=extractor,
    )

    async def run(target, page_number, token=""):
        if deliver:
            host.bridge.on_page_info(
                PageSnapshot(page=page_number, title="Example Domain", url="https://example.com/").to_json(),
                token,
            )
        else:
            host.bridge.on_error("boom", token)
        return "delivered"

    extractor.run = run
    return host


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.url is None
        assert args.headed is False
        assert args.verbose is False

    def test_flags(self):
        args = build_parser().parse_args(["--url", "https://example.com", "--headed", "--verbose"])
        assert args.url == "https://example.com"
        assert args.headed


class TestRunOnce:
    @pytest.mark.asyncio
    async def test_success(self, capsys):
        host = make_host()
        assert await run_once(host, "https://example.com") == EXIT_OK
        assert "=== PAGE 1 ===" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_invalid_url(self, capsys):
        host = make_host()
        assert await run_once(host, "ftp://x") == EXIT_INVALID_URL
        assert "URL must start with" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_extraction_error(self, capsys):
        host = make_host(deliver=False)
        assert await run_once(host, "https://example.com") == EXIT_EXTRACTION_ERROR
        assert "Error: boom" in capsys.readouterr().out


class TestHandleLine:
    @pytest.mark.asyncio
    async def test_quit_ends_session(self):
        host = make_host()
        assert await handle_line(host, "quit") is False
        assert await handle_line(host, " EXIT ") is False

    @pytest.mark.asyncio
    async def test_url_then_clear(self):
        host = make_host()
        assert await handle_line(host, "https://example.com") is True
        assert host.session.capture_count == 1
        assert await handle_line(host, "clear") is True
        assert host.session.capture_count == 0

    @pytest.mark.asyncio
    async def test_history_lists_captures(self, capsys):
        host = make_host()
        await handle_line(host, "https://example.com")
        await handle_line(host, "https://example.com")
        await handle_line(host, "history")
        out = capsys.readouterr().out
        assert "(2 captured)" in out
        assert "2. Example Domain <https://example.com/>" in out

    def test_empty_history(self):
        assert format_history(make_host()) == "No pages captured"
