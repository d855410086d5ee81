"""CineFlow: movie discovery, guided recommendations and a watched log."""

__version__ = "1.0.0"
