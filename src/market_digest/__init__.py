"""Market news digest with idempotent generation and theme impact scoring."""

__version__ = "0.1.0"
