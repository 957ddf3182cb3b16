"""Terminal dashboard for browsing a workflow-engine REST service."""

__version__ = '0.1.0'
