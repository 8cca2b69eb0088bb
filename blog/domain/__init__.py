"""Domain records and pure helpers (no storage, no async)."""
