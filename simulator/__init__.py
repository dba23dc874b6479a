"""Savings simulator: projection engine and JSON API."""
