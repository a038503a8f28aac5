"""HTTP surface: todo routes, shared dependencies, middleware and error handlers."""
