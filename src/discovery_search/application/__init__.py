"""Application layer – search parameter handling."""
