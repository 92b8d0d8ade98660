"""
Shared utilities: errors, time helpers and form validation.
"""
