"""Derived representation generators."""
