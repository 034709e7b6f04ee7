"""
Pydantic schemas for FallGuard Backend.

Contains all API request/response schemas organized by module.
"""
