"""Digest generators."""

from market_digest.adapters.digest.text_generator import PlainTextDigestGenerator

__all__ = ["PlainTextDigestGenerator"]
