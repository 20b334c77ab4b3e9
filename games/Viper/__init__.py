"""Viper - grid snake."""
