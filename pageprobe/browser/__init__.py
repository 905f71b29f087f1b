from pageprobe.browser.component import BLANK_URL, BrowserComponent

__all__ = ["BLANK_URL", "BrowserComponent"]
