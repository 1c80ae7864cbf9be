"""reportview - decentralized view synchronization for interactive violation reports."""

import logging

__version__ = "0.1.0"

from reportview.presentation.api.view import ReportView

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["ReportView", "__version__"]
