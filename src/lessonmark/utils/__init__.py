"""Utility helpers for lessonmark."""
