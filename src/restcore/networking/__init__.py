"""Networking layer: configuration resolution and call execution."""
