"""LumaStack backend: user accounts behind a small HTTP surface."""

__version__ = "0.1.0"

__all__ = ["__version__"]
