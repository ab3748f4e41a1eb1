"""
FEC Schedule A fetcher - itemized contributions for a candidate or committee.

The FEC (Federal Election Commission) API provides real-time campaign finance data.
API docs: https://api.open.fec.gov/developers/

Usage:
    fetcher = ContributionFetcher(client)
    contributions = await fetcher.run(committee_id="C00401224", cycle=2024)
"""
from typing import AsyncGenerator, Optional

from whofunds.ingestion.base import BaseFetcher
from whofunds.ingestion.client import FECClient
from whofunds.models.finance import NormalizedContribution
from whofunds.services.normalizer import normalize


class ContributionFetcher(BaseFetcher[NormalizedContribution]):
    """
    Fetch and normalize Schedule A contributions.

    Results are requested largest-first so that, when the page cap cuts the
    listing short, it is the smallest contributions that are left out.
    """

    ENDPOINT = "/schedules/schedule_a/"

    def __init__(
        self,
        client: FECClient,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
        unknown_industry: Optional[str] = None,
    ):
        super().__init__(client, per_page=per_page, max_pages=max_pages)
        self.unknown_industry = unknown_industry

    async def fetch_data(
        self,
        candidate_id: Optional[str] = None,
        committee_id: Optional[str] = None,
        cycle: int = 2024,
    ) -> AsyncGenerator[dict, None]:
        """
        Fetch individual contributions from FEC API.

        Args:
            candidate_id: FEC candidate ID (e.g., "S2UT00106" for Mike Lee)
            committee_id: FEC committee ID (takes precedence over candidate_id)
            cycle: Two-year transaction period (e.g., 2024)

        Yields:
            Raw contribution dictionaries from FEC API
        """
        if not candidate_id and not committee_id:
            raise ValueError("Must provide either candidate_id or committee_id")

        params = {
            "two_year_transaction_period": cycle,
            "sort": "-contribution_receipt_amount",
        }

        # Filter by committee or candidate
        if committee_id:
            params["committee_id"] = committee_id
        else:
            params["candidate_id"] = candidate_id

        self.logger.info(
            f"Fetching FEC contributions: "
            f"committee={committee_id}, candidate={candidate_id}, cycle={cycle}"
        )

        async for item in self.paginate(self.ENDPOINT, params):
            yield item

    def transform(self, raw: dict) -> NormalizedContribution:
        """
        Transform an FEC Schedule A record.

        Field mapping: https://api.open.fec.gov/developers/
        """
        return normalize(raw, unknown_industry=self.unknown_industry)
