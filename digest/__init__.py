"""Tech Digest — aggregated, time-windowed tech feed."""

__version__ = "0.1.0"
