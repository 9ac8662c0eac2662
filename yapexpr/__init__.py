"""Lazy expression trees built from Python operators, with evaluation and transforms."""

__version__ = "0.1.0"
__all__ = ["expression", "transform"]