"""Cross-cutting configuration, logging and crypto helpers."""
