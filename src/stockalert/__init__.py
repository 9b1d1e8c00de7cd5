"""Stock alert package root."""

from stockalert.exceptions import StockAlertError

__version__ = "0.1.0"

__all__ = ["StockAlertError", "__version__"]
