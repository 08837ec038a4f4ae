"""Shared helpers for maze agents."""
