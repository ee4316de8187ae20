"""gomodclean - reclaim disk space from unused Go modules."""

__version__ = "0.1.0"
