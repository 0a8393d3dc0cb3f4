"""Client profile ingestion."""

from equity_compass.ingestion.client_file import ClientFileLoader

__all__ = ["ClientFileLoader"]
