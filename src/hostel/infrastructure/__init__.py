"""Infrastructure adapters: persistence and e-mail."""
