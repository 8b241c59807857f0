"""Persistence: async SQLAlchemy engine, ORM models, repositories, filter translation."""
