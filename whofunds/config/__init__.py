"""Config module - settings and constants."""

from whofunds.config.settings import settings, get_settings, Settings
from whofunds.config.constants import (
    FEC_BASE_URL,
    CANDIDATE_ID_PATTERN,
    current_transaction_period,
    current_election_year,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "FEC_BASE_URL",
    "CANDIDATE_ID_PATTERN",
    "current_transaction_period",
    "current_election_year",
]
