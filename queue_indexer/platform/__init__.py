"""Indexing platform: batching engine and queue adapters."""
