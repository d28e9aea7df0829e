"""Version 1 API endpoints."""
