"""Utility functions."""

from .numbers import parse_decimal, parse_epoch_ms

__all__ = ["parse_decimal", "parse_epoch_ms"]
