"""HTTP handlers for the coffee resource."""
