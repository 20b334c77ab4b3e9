"""Guided Owl - gravity glider between columns."""
