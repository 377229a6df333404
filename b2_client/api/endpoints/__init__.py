"""B2 API endpoint functions, one per remote operation."""
