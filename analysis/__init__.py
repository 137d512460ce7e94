"""Analyse-Modul: Prüfung gespeicherter Stundenpläne."""

from analysis.schedule_audit import AuditReport, AuditViolation, ScheduleAuditor

__all__ = ["AuditReport", "AuditViolation", "ScheduleAuditor"]
