"""Action execution and result normalization."""
