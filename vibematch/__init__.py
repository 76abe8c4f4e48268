"""Music-taste compatibility scoring and swipe matching."""

__version__ = "0.1.0"
