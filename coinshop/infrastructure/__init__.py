"""Infrastructure adapters (database engine, repositories, locking)."""
