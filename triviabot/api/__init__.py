"""HTTP layer: routes, controllers and middleware."""
