"""Core building blocks: pagination, settings, exceptions and SQLAlchemy helpers."""
