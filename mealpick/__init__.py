"""Meal menu recommendation service with Korean-aware fuzzy menu matching."""
