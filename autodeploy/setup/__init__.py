"""Private key loading."""
