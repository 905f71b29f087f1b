"""Display text for captures, errors and status messages."""

from __future__ import annotations

INITIAL_PROMPT = "Enter a URL and click GET INFO"
EMPTY_URL = "Please enter a URL"
BAD_SCHEME = "URL must start with http:// or https://"
LOADING = "Loading page..."
RECAPTURING = "Capturing current page state..."
UNKNOWN_ERROR = "Unknown error"

_FOOTER = (
    "[Captured pages: {count}]\n"
    "[Navigate in the webpage, then click GET INFO to capture next page]\n"
    "[Click CLEAR to reset]"
)


def format_capture(count: int, snapshot_json: str) -> str:
    """Header, the raw snapshot JSON, then the running total and next steps."""
    header = f"=== PAGE {count} ===\n\n"
    footer = "\n\n" + _FOOTER.format(count=count)
    return header + snapshot_json + footer


def format_error(message: str) -> str:
    return f"Error: {message}"
