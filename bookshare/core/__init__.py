"""
Core module - data models and shared infrastructure.

This module contains:
- models: User, Book and store acknowledgment models
- errors: the error taxonomy rendered by the API
- recency: new/old classification of books
- utils: shared utility functions
"""
