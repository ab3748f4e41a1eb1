"""Donor pipeline building blocks."""

from whofunds.services.normalizer import normalize
from whofunds.services.aggregator import DonorAggregator, aggregate
from whofunds.services.classifier import DonorClassifier
from whofunds.services.cache import RosterCache
from whofunds.services.impact import build_impact_summary, industry_breakdown

__all__ = [
    "normalize",
    "DonorAggregator",
    "aggregate",
    "DonorClassifier",
    "RosterCache",
    "build_impact_summary",
    "industry_breakdown",
]
