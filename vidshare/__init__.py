"""Session and media-access core for the VideoShare browser client."""

__version__ = "0.1.0"
