"""Infrastructure - SQLAlchemy store, transports and telemetry."""
