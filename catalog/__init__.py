"""Client for a library catalog REST service."""
