"""Flight status lookup: provider normalization, status derivation and map configuration."""

__version__ = "0.1.0"
