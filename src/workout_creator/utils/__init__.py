"""Utility helpers for workout-creator."""
