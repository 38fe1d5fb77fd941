"""vidwatch: watch a directory and remux finished video files into MP4."""

__version__ = "0.1.0"
