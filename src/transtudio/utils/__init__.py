"""Utility helpers for Transtudio."""
