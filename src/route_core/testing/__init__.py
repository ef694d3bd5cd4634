# src/route_core/testing/__init__.py
"""Test helpers for route_core (fake grids)."""
