"""Pydantic models for the WCAG documentation graph."""
