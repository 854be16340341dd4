"""Ports implemented by the infrastructure layer."""

from cdcp.application.ports.audit import AuditEvent, AuditEventRepository, AuditSink

__all__ = ["AuditEvent", "AuditEventRepository", "AuditSink"]
