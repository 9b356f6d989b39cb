"""Validated data models."""
