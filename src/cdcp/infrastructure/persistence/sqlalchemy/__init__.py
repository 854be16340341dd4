"""SQLAlchemy persistence for users, reference data and audit events."""
