"""Socket.IO host for the snake game."""
