# ABOUTME: Cross-cutting utilities and shared infrastructure
# ABOUTME: Supporting services: logging, caller-side retry policy, rich output tables

"""
Utils Layer: Shared infrastructure and cross-cutting concerns

This layer provides:
- Logging configuration and structured logger helpers
- Retry policy for callers of the network services
- Table rendering for the command line
"""

from . import logging

__all__ = [
    "logging",
]
