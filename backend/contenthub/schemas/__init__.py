"""Content Hub - Schemas."""
