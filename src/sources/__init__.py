"""Upstream provider release sources."""
