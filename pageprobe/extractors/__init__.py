from pageprobe.extractors.base import BaseExtractor
from pageprobe.extractors.interactive import InteractiveExtractor

__all__ = ["BaseExtractor", "InteractiveExtractor"]
