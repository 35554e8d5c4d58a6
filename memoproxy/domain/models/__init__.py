"""Domain models: value objects and error types."""
