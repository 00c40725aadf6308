"""Calorie tracker backend."""
