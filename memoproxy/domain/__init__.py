"""Domain Layer: value objects, events and interfaces shared by every context."""
