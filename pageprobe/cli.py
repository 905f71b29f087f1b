"""Command-line front end: a text prompt in place of the URL field and buttons."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from pageprobe.browser.component import BrowserComponent
from pageprobe.config import ProbeConfig
from pageprobe.core.host import CaptureHost
from pageprobe.core.types import PageSnapshot
from pageprobe.errors import ConfigError
from pageprobe.logging_utils import build_logger

EXIT_OK = 0
EXIT_EXTRACTION_ERROR = 1
EXIT_INVALID_URL = 2

_PROMPT = "url> "
_HELP = "Commands: <http(s) URL> to capture, 'clear', 'history', 'quit'"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageprobe",
        description="Capture the inputs, buttons and selects of live web pages",
    )
    parser.add_argument("--url", help="Capture this URL once, print the result and exit")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-file", type=Path, help="Also write a debug log to this file")
    return parser


def format_history(host: CaptureHost) -> str:
    history = host.session.history
    if not history:
        return "No pages captured"
    lines = [f"{host.session.current_url} ({len(history)} captured)"]
    for index, raw in enumerate(history, start=1):
        snapshot = PageSnapshot.from_json(raw)
        lines.append(f"  {index}. {snapshot.title or '(untitled)'} <{snapshot.url}>")
    return "\n".join(lines)


async def handle_line(host: CaptureHost, line: str) -> bool:
    """Dispatch one line of input. Returns False when the session should end."""
    command = line.strip()
    if command.lower() in {"quit", "exit"}:
        return False
    if command.lower() == "clear":
        await host.clear()
    elif command.lower() == "history":
        print(format_history(host))
    elif command.lower() in {"help", "?"}:
        print(_HELP)
    elif host.get_info(command):
        await host.timer.wait_idle()
    return True


async def run_interactive(host: CaptureHost) -> int:
    loop = asyncio.get_running_loop()
    host.display.subscribe(print)
    print(_HELP)
    print(host.display.text)
    while True:
        try:
            line = await loop.run_in_executor(None, input, _PROMPT)
        except EOFError:
            break
        if not await handle_line(host, line):
            break
    return EXIT_OK


async def run_once(host: CaptureHost, url: str) -> int:
    if not host.get_info(url):
        print(host.display.text)
        return EXIT_INVALID_URL
    await host.timer.wait_idle()
    print(host.display.text)
    return EXIT_OK if host.session.capture_count else EXIT_EXTRACTION_ERROR


async def run(args: argparse.Namespace, config: ProbeConfig) -> int:
    async with BrowserComponent(config) as browser:
        host = CaptureHost(browser, config=config)
        await browser.install_bridge(host.bridge)
        try:
            if args.url:
                return await run_once(host, args.url)
            return await run_interactive(host)
        finally:
            host.timer.cancel_all()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    build_logger(verbose=args.verbose, log_file=args.log_file)

    try:
        config = ProbeConfig.from_env()
    except ConfigError as exc:
        parser.error(str(exc))
    if args.headed:
        config.headless = False

    return asyncio.run(run(args, config))


if __name__ == "__main__":
    raise SystemExit(main())
