"""Core application plumbing: configuration, lifespan, middleware, errors."""
