"""Bundled fallback data."""

from whofunds.data.mock_donors import get_mock_donors, get_mock_politicians

__all__ = ["get_mock_donors", "get_mock_politicians"]
