"""Content Hub - API package."""
