"""History API endpoints."""
