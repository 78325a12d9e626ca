"""Shakespearean insult generator."""
