"""Data layer - schemas for locations, sessions, attempts and users."""
