"""Desktop host window."""
