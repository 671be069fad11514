"""Unauthenticated endpoints."""
