"""srclink: view-source links for documentation files."""

__version__ = "0.1.0"
