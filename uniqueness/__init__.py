"""Live near-duplicate detection for content titles and tags."""

__version__ = "0.1.0"
