"""Domain services: shopping-list aggregation, carts and sharing, recipe lookup."""
