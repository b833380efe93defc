"""Application layer - use cases over the invoice domain."""
