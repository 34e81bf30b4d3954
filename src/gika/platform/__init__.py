"""Infrastructure adapters: HTTP access to Tika and logging."""
