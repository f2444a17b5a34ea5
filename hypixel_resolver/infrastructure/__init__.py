"""Infrastructure layer: HTTP fetcher and cache store implementations."""
