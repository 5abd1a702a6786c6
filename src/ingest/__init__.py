"""Provider import pipeline.

This module decodes provider manifests and drives each provider through
fetch, transform, and artifact write stages.
"""
