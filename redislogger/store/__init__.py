"""Backing store address, client and key layout."""
