"""Configuration, watcher and command-line entry point."""
