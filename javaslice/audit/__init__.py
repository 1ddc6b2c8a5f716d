"""Audit-log collaborator."""

from .logger import AuditLogger, normalise_ip, normalise_payload

__all__ = ["AuditLogger", "normalise_ip", "normalise_payload"]
