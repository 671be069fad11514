"""Shared router helpers: dependencies and pagination."""
