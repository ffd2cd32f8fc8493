"""Configuration — settings and structured logging."""
