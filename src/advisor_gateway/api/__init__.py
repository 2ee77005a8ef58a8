"""HTTP surface of the advisor gateway."""
