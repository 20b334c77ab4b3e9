"""Cabinet games. Each subdirectory with a game_mode.py is one game."""
