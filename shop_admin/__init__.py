"""Shop Admin: desktop administration client for the shop REST backend."""

__version__ = "1.0.0"
