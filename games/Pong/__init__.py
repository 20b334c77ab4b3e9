"""Pong - paddle and ball."""
