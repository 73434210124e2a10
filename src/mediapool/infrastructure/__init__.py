"""Storage and CDN adapters."""
