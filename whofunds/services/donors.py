"""
Donor lookup pipeline.

candidate ID -> committees -> Schedule A pages -> normalize -> aggregate -> rank

Policies:
    * Committees: contributions are fetched per committee. When a candidate
      has no committee for the cycle (or the lookup fails) the pipeline
      queries Schedule A by candidate_id instead, unless
      ``require_committees`` is set, in which case it raises NotFoundError.
    * Credentials: with no FEC API key the pipeline returns the bundled
      example donors flagged ``is_mock_data`` (or raises
      MissingCredentialError when mock fallback is disabled).
    * Upstream failures raise UpstreamFailureError. Once some records have
      been collected, a later failure keeps them and marks the result partial.

Usage:
    pipeline = DonorPipeline(FECClient())
    result = await pipeline.run("S2UT00106", cycle=2024)
"""
import asyncio
import logging
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from whofunds.config.constants import current_transaction_period, normalize_candidate_id
from whofunds.config.settings import settings
from whofunds.data.mock_donors import get_mock_donors
from whofunds.errors import (
    DonorLookupError,
    InvalidInputError,
    MissingCredentialError,
    NotFoundError,
    UpstreamFailureError,
)
from whofunds.ingestion.client import FECClient
from whofunds.ingestion.committees import CommitteeResolver
from whofunds.ingestion.fec import ContributionFetcher
from whofunds.models.finance import DonorResult
from whofunds.services.aggregator import DonorAggregator, NameKey, get_name_key

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    RESOLVING_COMMITTEES = "resolving_committees"
    FETCHING_CONTRIBUTIONS = "fetching_contributions"
    AGGREGATING = "aggregating"
    DONE = "done"
    ERROR = "error"
    MOCK_FALLBACK = "mock_fallback"


class SourceOutcome:
    """Contributions gathered from one committee (or the candidate directly)."""

    def __init__(self, source: str, aggregator: DonorAggregator, partial: bool, error: Optional[UpstreamFailureError]):
        self.source = source
        self.aggregator = aggregator
        self.partial = partial
        self.error = error


class DonorPipeline:
    """
    Runs one donor lookup at a time; create one per request.

    ``state`` holds the current PipelineState so callers and tests can see
    where a run ended.
    """

    def __init__(
        self,
        client: FECClient,
        resolver: Optional[CommitteeResolver] = None,
        small_donation_threshold: Union[Decimal, float, None] = None,
        limit: Optional[int] = None,
        require_committees: Optional[bool] = None,
        mock_fallback: Optional[bool] = None,
        name_key: Optional[NameKey] = None,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
        unknown_industry: Optional[str] = None,
    ):
        self.client = client
        self.resolver = resolver or CommitteeResolver(client)
        self.small_donation_threshold = (
            settings.SMALL_DONATION_THRESHOLD if small_donation_threshold is None else small_donation_threshold
        )
        self.limit = settings.TOP_DONORS_LIMIT if limit is None else limit
        self.require_committees = settings.REQUIRE_COMMITTEES if require_committees is None else require_committees
        self.mock_fallback = settings.MOCK_FALLBACK_ENABLED if mock_fallback is None else mock_fallback
        self.name_key = name_key or get_name_key(settings.DONOR_NAME_MATCHING)
        self.per_page = per_page
        self.max_pages = max_pages
        self.unknown_industry = unknown_industry
        self.state = PipelineState.IDLE

    def _transition(self, state: PipelineState):
        logger.debug(f"Donor pipeline: {self.state.value} -> {state.value}")
        self.state = state

    def _fail(self, error: DonorLookupError):
        self._transition(PipelineState.ERROR)
        raise error

    async def run(self, candidate_id: Optional[str], cycle: Optional[int] = None) -> DonorResult:
        """
        Look up and rank a candidate's donors.

        Args:
            candidate_id: FEC candidate ID (validated before any network call)
            cycle: Election year; odd years map to the period they fall in

        Returns:
            DonorResult with donors sorted by amount and truncated to ``limit``

        Raises:
            InvalidInputError: Malformed candidate ID
            MissingCredentialError: No API key and mock fallback disabled
            NotFoundError: No committees and ``require_committees`` set
            UpstreamFailureError: OpenFEC failed before any records arrived
        """
        self.state = PipelineState.IDLE

        cid = normalize_candidate_id(candidate_id)
        if cid is None:
            self._fail(InvalidInputError(
                f"Invalid candidate ID {candidate_id!r}: expected an FEC ID such as S2UT00106"
            ))

        period = current_transaction_period(cycle)

        if not self.client.has_credentials:
            if self.mock_fallback:
                logger.warning("No FEC API key found. Using mock data.")
                return self._mock_result(cid, period, "FEC_API_KEY is not configured; showing example data")
            self._fail(MissingCredentialError("FEC_API_KEY is not configured"))

        try:
            return await self._run_live(cid, period)
        except DonorLookupError:
            self._transition(PipelineState.ERROR)
            raise

    async def _run_live(self, cid: str, period: int) -> DonorResult:
        self._transition(PipelineState.RESOLVING_COMMITTEES)
        committees = await self.resolver.resolve(cid, period)

        if committees:
            sources = [("committee_id", c.committee_id) for c in committees]
        elif self.require_committees:
            raise NotFoundError(f"No committees found for candidate {cid} in {period}")
        else:
            logger.info(f"No committees for {cid}; querying contributions by candidate ID")
            sources = [("candidate_id", cid)]

        self._transition(PipelineState.FETCHING_CONTRIBUTIONS)
        outcomes = await asyncio.gather(
            *(self._fetch_source(kind, source_id, period) for kind, source_id in sources),
            return_exceptions=True,
        )

        self._transition(PipelineState.AGGREGATING)
        aggregator = DonorAggregator(self.small_donation_threshold, key=self.name_key)
        notes = []
        failures: list[UpstreamFailureError] = []
        partial = False

        # Merge in committee order so industry attribution is deterministic
        for (kind, source_id), outcome in zip(sources, outcomes):
            if isinstance(outcome, UpstreamFailureError):
                failures.append(outcome)
                notes.append(f"{source_id}: {outcome.message}")
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            aggregator.merge(outcome.aggregator)
            if outcome.partial:
                partial = True
                notes.append(f"{source_id}: {outcome.error.message}")

        if failures and (len(failures) == len(sources) or aggregator.contribution_count == 0):
            raise failures[0]
        partial = partial or bool(failures)

        donors = aggregator.results(limit=self.limit)
        self._transition(PipelineState.DONE)

        message = None
        if partial:
            message = "Some contribution pages could not be fetched: " + "; ".join(notes)
        elif not donors:
            message = f"No contributions reported for {cid} in {period}"

        logger.info(
            f"Aggregated {aggregator.contribution_count} contributions for {cid} "
            f"into {len(donors)} donors (small donations: {aggregator.small_donations_total})"
        )

        return DonorResult(
            candidate_id=cid,
            cycle=period,
            donors=donors,
            small_donations_total=aggregator.small_donations_total,
            partial=partial,
            message=message,
            committees=[source_id for kind, source_id in sources if kind == "committee_id"],
        )

    async def _fetch_source(self, kind: str, source_id: str, period: int) -> SourceOutcome:
        fetcher = ContributionFetcher(
            self.client,
            per_page=self.per_page,
            max_pages=self.max_pages,
            unknown_industry=self.unknown_industry,
        )
        contributions = await fetcher.run(**{kind: source_id}, cycle=period)

        aggregator = DonorAggregator(self.small_donation_threshold, key=self.name_key)
        aggregator.extend(contributions)
        return SourceOutcome(source_id, aggregator, fetcher.partial, fetcher.last_error)

    def _mock_result(self, cid: str, period: int, message: str) -> DonorResult:
        self._transition(PipelineState.MOCK_FALLBACK)
        donors = get_mock_donors(cid)
        if self.limit is not None:
            donors = donors[:self.limit]
        return DonorResult(
            candidate_id=cid,
            cycle=period,
            donors=donors,
            is_mock_data=True,
            message=message,
        )
