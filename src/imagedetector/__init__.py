"""image-detector — find container image references in a directory tree."""

__version__ = "0.1.0"
