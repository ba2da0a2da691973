"""Upstream quote sources."""
