"""MinWiki — a minimal wiki server backed by a single relational table."""
from minwiki._version import __version__

__all__ = ["__version__"]
