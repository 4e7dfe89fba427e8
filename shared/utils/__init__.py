"""
Shared utilities for the iLocal auth service
"""

from .logger import setup_logging, AuditLogger, get_audit_logger

__all__ = [
    "setup_logging",
    "AuditLogger",
    "get_audit_logger",
]

__version__ = "1.0.0"
