"""Application layer: use-case services and ports."""
