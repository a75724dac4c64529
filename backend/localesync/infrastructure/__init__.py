"""Infrastructure Layer — database sessions, SQL query engine, locale store, logging setup."""
