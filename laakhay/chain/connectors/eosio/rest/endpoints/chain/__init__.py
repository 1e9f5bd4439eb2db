"""Chain API endpoints."""
