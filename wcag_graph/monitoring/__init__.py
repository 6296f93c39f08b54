"""Logging setup for graph builds."""
