from pageprobe.formatter.display import InfoDisplay
from pageprobe.formatter.formatter import format_capture, format_error

__all__ = ["InfoDisplay", "format_capture", "format_error"]
