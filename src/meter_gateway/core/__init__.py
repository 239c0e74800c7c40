"""Core application infrastructure: state, lifecycle, errors, middleware."""
