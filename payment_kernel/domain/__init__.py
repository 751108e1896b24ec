"""Pure domain helpers for the payment kernel (no I/O)."""
