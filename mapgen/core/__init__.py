"""Core generation engine. Has no knowledge of HTTP, storage or rendering."""
