"""Adapters: pure I/O (HTTP to the shortening service, clipboard)."""
