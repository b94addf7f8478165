"""Declarative base shared by ORM models and Alembic."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()

__all__ = ["Base"]
