"""Starbang: seeded universe generation and market simulation."""
