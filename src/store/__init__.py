"""Artifact persistence layer.

This module packages transformed components into ConfigMap artifacts
and writes them to the output directory.
"""
