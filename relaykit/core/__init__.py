"""Core relay components: identification registry and pagination engine."""
