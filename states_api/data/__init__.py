"""Bundled reference dataset (states.json)."""
