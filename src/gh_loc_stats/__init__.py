"""gh-loc-stats: yearly lines-of-code statistics for a GitHub account."""

__version__ = "0.1.0"
