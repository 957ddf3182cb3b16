from .dashboard_app import DashboardApp, Modal

__all__ = ["DashboardApp", "Modal"]
