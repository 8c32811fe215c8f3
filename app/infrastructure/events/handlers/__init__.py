"""Event handlers for the translation notification channel."""

from infrastructure.events.handlers.audit import AuditLogHandler

__all__ = ["AuditLogHandler"]
