"""Application layer: data access, services and user interface."""
