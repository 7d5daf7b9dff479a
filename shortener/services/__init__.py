"""
Services module for business logic separation.

This module contains service classes that operate on the URL registry,
keeping registration, click recording and statistics separate from the
API endpoints.
"""
