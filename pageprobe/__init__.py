from pageprobe.browser.component import BrowserComponent
from pageprobe.bridge.bridge import BRIDGE_NAME, PageBridge
from pageprobe.config import ProbeConfig
from pageprobe.core.host import CaptureHost
from pageprobe.core.session import CaptureSession
from pageprobe.core.types import (
    ButtonDescriptor,
    InputDescriptor,
    PageSnapshot,
    SelectDescriptor,
    SessionState,
)
from pageprobe.errors import (
    BrowserNotStartedError,
    ConfigError,
    PageProbeError,
    SnapshotFormatError,
)

__all__ = [
    "BRIDGE_NAME",
    "BrowserComponent",
    "ButtonDescriptor",
    "CaptureHost",
    "CaptureSession",
    "InputDescriptor",
    "PageBridge",
    "PageSnapshot",
    "ProbeConfig",
    "SelectDescriptor",
    "SessionState",
    # Errors
    "BrowserNotStartedError",
    "ConfigError",
    "PageProbeError",
    "SnapshotFormatError",
]
