"""Queue-backed search indexing for content repository nodes."""
