"""Typed models for upstream GitHub records."""
