"""Per-user notes and accounts kept on a key-value store, served over FastAPI."""
