"""DiskScope: interactive disk space explorer."""

__version__ = "0.1.0"
