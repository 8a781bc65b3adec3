"""Application core: configuration, database, sessions, and cross-cutting concerns."""
