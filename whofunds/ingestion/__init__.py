"""OpenFEC fetchers."""

from whofunds.ingestion.client import FECClient
from whofunds.ingestion.base import BaseFetcher
from whofunds.ingestion.fec import ContributionFetcher
from whofunds.ingestion.candidates import CandidateDirectoryFetcher
from whofunds.ingestion.committees import CommitteeResolver

__all__ = [
    "FECClient",
    "BaseFetcher",
    "ContributionFetcher",
    "CandidateDirectoryFetcher",
    "CommitteeResolver",
]
