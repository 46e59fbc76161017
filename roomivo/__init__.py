"""Roomivo rental marketplace API."""
