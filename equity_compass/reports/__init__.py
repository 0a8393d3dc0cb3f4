"""Report generation for Equity Compass."""

from equity_compass.reports.client_report import ClientReportGenerator

__all__ = ["ClientReportGenerator"]
