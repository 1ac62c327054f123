"""Zein Bus booking service."""
