"""Configuration, paths and version information."""
