"""User accounts service: registration, login sessions and user records."""

__version__ = "0.1.0"
