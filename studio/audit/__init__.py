"""Audit logging package."""

from studio.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
