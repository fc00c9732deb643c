"""Monitoring exports."""

from capital_path.monitoring.audit import AuditLog

__all__ = ["AuditLog"]
