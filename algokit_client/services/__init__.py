"""Service layer — one module per group of node operations."""
