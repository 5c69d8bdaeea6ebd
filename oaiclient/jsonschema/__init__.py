"""Describe simple JSON schemas and validate data against them."""

__all__ = ["definition", "validate"]