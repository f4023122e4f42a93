"""Video Transcode Job - probe, generate and deliver video renditions."""

__version__ = "0.1.0"
