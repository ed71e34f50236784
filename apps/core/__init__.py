"""
Core app - Shared abstractions and utilities.

This app provides the plumbing every other app leans on:
- Result / Error values returned by services (results.py)
- Error -> HTTP status mapping and the ErrorResponse schema (responses.py)
- Generic repositories and the UnitOfWork transaction scope (repositories.py)
- Global exception handling middleware (middleware.py)
"""
