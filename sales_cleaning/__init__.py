"""Sales record cleaning and aggregation pipeline."""
