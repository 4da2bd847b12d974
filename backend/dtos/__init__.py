"""
Data Transfer Objects (DTOs) Layer

This package contains DTOs that decouple submitted form data from the database models.
A command object is validated as a whole and never persisted itself.

Structure:
- request/: DTOs for incoming submissions
"""
