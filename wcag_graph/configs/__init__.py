"""Configuration for the WCAG documentation graph engine."""
