"""Break-time System package.

This package is organized by feature modules (users, breaks, ...)
with a thin Flask controller layer and service/repository layers
over an in-memory record store.
"""
