"""Utility modules for gemspan.

Provides:
- logger: get_logger for namespaced logging
"""

from gemspan.utils.logger import get_logger

__all__ = ["get_logger"]
