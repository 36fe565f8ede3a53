"""cafe: terminal ordering front end for a small café database"""

__version__ = "1.0.0"
