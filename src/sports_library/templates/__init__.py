"""Bundled JSON templates."""
