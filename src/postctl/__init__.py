"""postctl — static-site post corpus loader and front-matter indexer."""

__version__ = "0.1.0"
