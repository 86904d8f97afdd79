"""Core data models for the album builder."""
