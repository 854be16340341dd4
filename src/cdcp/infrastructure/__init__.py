"""Infrastructure adapters: persistence, audit, scheduling, security."""
