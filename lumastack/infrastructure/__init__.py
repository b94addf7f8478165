"""Outbound adapters: database engine, ORM models and repositories."""
