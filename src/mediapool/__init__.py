"""Media lifecycle management: provider pool, storage and HTTP API."""
