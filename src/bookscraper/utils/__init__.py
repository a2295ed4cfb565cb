"""Utility helpers for bookscraper."""
