"""Create temporary files in a safe manner."""
