"""Adaptive review engine for a personal vocabulary."""
