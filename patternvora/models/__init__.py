"""Configuration, shape and application-state models."""
