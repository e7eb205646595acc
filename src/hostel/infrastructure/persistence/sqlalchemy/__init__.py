"""SQLAlchemy persistence for accounts."""
