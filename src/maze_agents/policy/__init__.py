"""Scripted policies built on the grid search engine."""
