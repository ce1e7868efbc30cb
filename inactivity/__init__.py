"""Repository inactivity analyzer."""

__version__ = "1.0.0"
