"""
Committee resolution for a candidate.

Contributions are filed against committees, not candidates, so a donor
lookup first asks OpenFEC which committees belong to the candidate.
"""
import logging
from typing import Optional

from pydantic import ValidationError

from whofunds.errors import UpstreamFailureError
from whofunds.ingestion.client import FECClient
from whofunds.models.finance import Committee

logger = logging.getLogger(__name__)


class CommitteeResolver:
    """
    Resolve a candidate's committees for a cycle.

    ``resolve`` returns an empty list rather than raising when OpenFEC
    cannot answer, so the caller can fall back to a candidate-scoped query.
    """

    def __init__(self, client: FECClient):
        self.client = client
        self.logger = logging.getLogger(self.__class__.__name__)
        self.last_error: Optional[UpstreamFailureError] = None

    async def fetch_committees(self, candidate_id: str, cycle: int) -> list[Committee]:
        """
        GET /candidate/{candidate_id}/committees/

        Raises:
            UpstreamFailureError: On any upstream failure
        """
        results, _ = await self.client.get_results(
            f"/candidate/{candidate_id}/committees/",
            {"cycle": cycle, "per_page": 100},
        )

        committees = []
        seen = set()
        for item in results:
            committee_id = item.get("committee_id")
            if not isinstance(committee_id, str) or not committee_id or committee_id in seen:
                continue
            try:
                committee = Committee(
                    committee_id=committee_id,
                    name=item.get("name"),
                    designation=item.get("designation"),
                )
            except ValidationError as e:
                self.logger.warning(f"Skipping malformed committee {committee_id}: {e}")
                continue
            seen.add(committee_id)
            committees.append(committee)

        return committees

    async def resolve(self, candidate_id: str, cycle: int) -> list[Committee]:
        """
        Committees for the candidate, or [] when none can be resolved.

        Args:
            candidate_id: Validated FEC candidate ID
            cycle: Two-year transaction period
        """
        self.last_error = None
        try:
            committees = await self.fetch_committees(candidate_id, cycle)
        except UpstreamFailureError as e:
            self.last_error = e
            self.logger.warning(
                f"Committee lookup failed for {candidate_id}: {e.message}"
            )
            return []

        self.logger.info(
            f"Resolved {len(committees)} committees for {candidate_id}: "
            f"{', '.join(c.committee_id for c in committees) or 'none'}"
        )
        return committees
