"""
NSE Ticker Services

Service layer containing the data-acquisition logic.
Each service has a defined interface (contract) and implementation.
"""

from nseticker.services.base import BaseService

__all__ = ["BaseService"]
