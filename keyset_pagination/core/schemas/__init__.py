"""Response schemas shared across the HTTP surface."""
