"""Search path and context preparation."""
