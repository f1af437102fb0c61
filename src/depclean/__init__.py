"""depclean - prune unused entries from Maven dependency sections."""

__version__ = "0.1.0"
