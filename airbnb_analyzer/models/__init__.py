"""Frozen pydantic models for listings and computed results."""
