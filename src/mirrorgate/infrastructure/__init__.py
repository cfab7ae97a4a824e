"""Infrastructure - cross-cutting concerns (logging)."""
