"""Read kernel statistics from the Linux proc and sys pseudo-filesystems."""

__version__ = "0.1.0"