"""Host-facing API.

Public exports:
    ReportView: Mounted report document with its central store
"""

from reportview.presentation.api.view import ReportView

__all__ = ["ReportView"]
