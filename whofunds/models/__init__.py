"""Data models module."""

from whofunds.models.politician import (
    Office,
    Party,
    Politician,
    RosterResult,
    RosterStats,
)

from whofunds.models.finance import (
    AggregatedDonor,
    Committee,
    DonorResult,
    NormalizedContribution,
)

__all__ = [
    # Politician
    "Office",
    "Party",
    "Politician",
    "RosterResult",
    "RosterStats",
    # Finance
    "AggregatedDonor",
    "Committee",
    "DonorResult",
    "NormalizedContribution",
]
