"""HTTP service for markdown CV generation."""
