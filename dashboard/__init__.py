"""
Dashboard module - Terminal UI for TradeDesk.

Rich panels rendered from DashboardState. Each panel is a separate
function so the Textual app can reuse them.
"""

from dashboard.display import Dashboard

__all__ = ["Dashboard"]
