"""Static assets served by the HTTP adapter."""
