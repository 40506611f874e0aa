"""Team-wide decision managers."""
