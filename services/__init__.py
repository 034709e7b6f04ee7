"""
Services module for FallGuard Backend.

Contains risk scoring, analytics and account business logic.
"""
