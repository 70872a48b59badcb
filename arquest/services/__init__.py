"""Services for stat derivation and equipment."""
