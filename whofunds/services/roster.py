"""
Politician roster for the politician picker.

Combines the Senate and House candidate directories, deduplicates them and
keeps the result in a RosterCache. Refreshes are single-flight: concurrent
requests on an expired cache wait for one upstream fetch.
"""
import asyncio
import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, Optional

from whofunds.config.constants import current_election_year
from whofunds.config.settings import settings
from whofunds.data.mock_donors import get_mock_politicians
from whofunds.ingestion.candidates import CandidateDirectoryFetcher
from whofunds.ingestion.client import FECClient
from whofunds.models.politician import Office, Politician, RosterResult, RosterStats
from whofunds.services.cache import RosterCache

logger = logging.getLogger(__name__)


def dedupe_by_candidate_id(politicians: Iterable[Politician]) -> list[Politician]:
    """Later records for the same candidate_id replace earlier ones (first position kept)."""
    unique: dict[str, Politician] = {}
    for politician in politicians:
        unique[politician.candidate_id] = politician
    return list(unique.values())


def prefer_incumbents(representatives: Iterable[Politician]) -> list[Politician]:
    """
    For each (state, district) seat, drop challengers when an incumbent is listed.

    Seats without an incumbent keep every candidate. Candidates without a
    district are always kept.
    """
    representatives = list(representatives)
    seats_with_incumbent = {
        (p.state, p.district)
        for p in representatives
        if p.is_incumbent and p.district is not None
    }
    return [
        p for p in representatives
        if p.district is None
        or p.is_incumbent
        or (p.state, p.district) not in seats_with_incumbent
    ]


def build_stats(politicians: list[Politician]) -> RosterStats:
    senators = [p for p in politicians if p.office == Office.SENATOR]
    return RosterStats(
        total=len(politicians),
        senators=len(senators),
        representatives=len(politicians) - len(senators),
        senator_counts_by_state=dict(Counter(p.state for p in senators)),
    )


class RosterService:
    """
    Serves the combined roster, fetching from OpenFEC at most once per TTL.

    When nothing can be fetched (no credential, or every page failed) the
    bundled example politicians are returned with ``is_mock_data`` set and
    the failure in ``error``. Mock rosters are never cached.

    A partial roster also carries ``error``. It is cached unless a whole
    office is missing because of an upstream failure.
    """

    def __init__(
        self,
        client: FECClient,
        cache: Optional[RosterCache] = None,
        election_year: Optional[int] = None,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
    ):
        self.client = client
        self.cache = cache or RosterCache(ttl=timedelta(hours=settings.ROSTER_CACHE_TTL_HOURS))
        self.election_year = election_year
        self.per_page = per_page
        self.max_pages = max_pages
        self.fetch_count = 0
        self._lock = asyncio.Lock()

    async def list_politicians(
        self,
        office: Optional[Office] = None,
        now: Optional[datetime] = None,
    ) -> RosterResult:
        """
        Cached roster, refreshed when older than the cache TTL.

        Args:
            office: Only return Senators or Representatives (None for both)
            now: Clock override for tests
        """
        roster = self.cache.get(now)
        if roster is None:
            async with self._lock:
                # Another request may have refreshed while we waited
                roster = self.cache.get(now)
                if roster is None:
                    return self._filter(await self.refresh(now), office)

        logger.info("Returning cached politicians data")
        return self._filter(roster.model_copy(update={"cached": True}), office)

    async def _fetch_office(self, office: Office, election_year: int) -> tuple[list[Politician], Optional[str]]:
        fetcher = CandidateDirectoryFetcher(
            self.client, office, per_page=self.per_page, max_pages=self.max_pages
        )
        politicians = await fetcher.run(election_year=election_year)
        error = fetcher.last_error.message if fetcher.last_error else None
        logger.info(f"Fetched {len(politicians)} {office.value.lower()} candidates")
        return politicians, error

    async def refresh(self, now: Optional[datetime] = None) -> RosterResult:
        """Fetch both offices from OpenFEC and replace the cached roster."""
        now = now or datetime.utcnow()
        self.fetch_count += 1

        if not self.client.has_credentials:
            logger.warning("No FEC API key configured. Using mock politicians.")
            return self._mock_result("FEC_API_KEY is not configured", now)

        election_year = self.election_year or current_election_year()
        logger.info(f"Using election year: {election_year}")

        senators, senate_error = await self._fetch_office(Office.SENATOR, election_year)
        representatives, house_error = await self._fetch_office(Office.REPRESENTATIVE, election_year)

        unique_senators = dedupe_by_candidate_id(senators)
        unique_representatives = prefer_incumbents(dedupe_by_candidate_id(representatives))
        politicians = unique_senators + unique_representatives

        errors = [e for e in (senate_error, house_error) if e]
        if not politicians and errors:
            logger.error(f"Roster fetch failed: {'; '.join(errors)}")
            return self._mock_result("; ".join(errors), now)

        error = "; ".join(errors) or None
        if error:
            logger.warning(f"Roster is partial: {error}")

        result = RosterResult(
            politicians=politicians,
            stats=build_stats(politicians),
            error=error,
            fetched_at=now,
        )

        # An office lost entirely to an upstream error is retried on the next request
        office_missing = (not senators and senate_error) or (not representatives and house_error)
        if office_missing:
            logger.warning("Not caching roster: an office returned no candidates")
        else:
            self.cache.set(result, now)
        return result

    def _mock_result(self, error: str, now: datetime) -> RosterResult:
        politicians = get_mock_politicians()
        return RosterResult(
            politicians=politicians,
            stats=build_stats(politicians),
            is_mock_data=True,
            error=error,
            fetched_at=now,
        )

    @staticmethod
    def _filter(roster: RosterResult, office: Optional[Office]) -> RosterResult:
        if office is None:
            return roster
        politicians = [p for p in roster.politicians if p.office == office]
        return roster.model_copy(update={
            "politicians": politicians,
            "stats": build_stats(politicians),
        })
