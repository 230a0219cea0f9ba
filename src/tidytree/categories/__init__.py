"""Built-in junk categories. Every JunkCategory subclass here is loaded."""
