"""Configuration: environment settings, tuning constants and the Redis client."""
