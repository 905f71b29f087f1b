from pageprobe.bridge.bridge import BRIDGE_INSTALL_JS, BRIDGE_NAME, PageBridge

__all__ = ["BRIDGE_INSTALL_JS", "BRIDGE_NAME", "PageBridge"]
