"""Pydantic models."""

from wafctl.models.audit_event import AuditEvent
from wafctl.models.site import Site, SiteMode, normalize_backend, normalize_domain

__all__ = ["AuditEvent", "Site", "SiteMode", "normalize_backend", "normalize_domain"]
