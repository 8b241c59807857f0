"""Infrastructure layer: SQLAlchemy persistence and token security."""
