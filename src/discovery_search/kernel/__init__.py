"""Kernel – shared building blocks with no search-specific knowledge."""
