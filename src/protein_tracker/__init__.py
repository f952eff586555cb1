"""Protein tracker package."""
