"""CDCP notification subscription service."""
