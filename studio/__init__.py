"""Creative studio generation proxy."""
