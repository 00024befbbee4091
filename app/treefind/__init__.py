"""treefind - walk a directory tree and act on entries matching criteria."""

__version__ = "1.0.0"
