"""Core task-list logic: entry codec, store, configuration and errors."""
