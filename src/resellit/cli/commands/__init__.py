"""Click command groups, each registered on the root group via register_commands."""
