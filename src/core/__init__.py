"""
Core mathematical primitives, decimal oracle, and validation models.

This module contains the foundational building blocks that are independent
of any consuming application.
"""
