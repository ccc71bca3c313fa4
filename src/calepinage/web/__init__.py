"""REST API for calepinage."""
