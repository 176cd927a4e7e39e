"""Infrastructure — database sessions, the SQL fact store, and logging setup."""
