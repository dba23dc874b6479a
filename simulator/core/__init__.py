"""Pure calculation engine."""
