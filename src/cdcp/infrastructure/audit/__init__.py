"""Audit event sinks."""

from cdcp.infrastructure.audit.queued_audit_sink import QueuedAuditSink

__all__ = ["QueuedAuditSink"]
