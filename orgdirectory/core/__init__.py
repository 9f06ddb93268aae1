"""Configuration, validation and error types shared by every layer."""
