"""CloudCore configuration records and the tool's own runtime settings."""
