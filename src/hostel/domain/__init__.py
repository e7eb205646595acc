"""Domain layer: accounts and shared building blocks."""
