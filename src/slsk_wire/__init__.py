"""Wire codec for a Soulseek-style peer-to-peer file-sharing protocol."""

__version__ = "0.1.0"
