"""Utility helpers for logging, rate limiting and console output."""
