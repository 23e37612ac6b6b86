"""Command-line restaurant assistant driven by a JSON tool-use protocol."""

__version__ = "1.0.0"
