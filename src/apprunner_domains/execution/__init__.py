"""AWS App Runner SDK access."""
