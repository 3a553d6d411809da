"""Cross-file duplicate fragment detection."""

from .detector import MIN_DUPLICATE_LINES, FingerprintIndex, detect_duplicates, fingerprint

__all__ = ["MIN_DUPLICATE_LINES", "FingerprintIndex", "detect_duplicates", "fingerprint"]
