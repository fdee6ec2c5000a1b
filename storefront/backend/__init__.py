"""Backend collaborators: PostgreSQL pool, queries and outbound email."""
