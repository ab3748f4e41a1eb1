"""
Fetcher for the FEC candidate directory.

Pages through /candidates/ for one office (Senate or House) and turns each
record into a Politician. Records without a usable candidate_id are dropped.

Usage:
    fetcher = CandidateDirectoryFetcher(client, Office.SENATOR)
    senators = await fetcher.run(election_year=2024)
"""
from typing import AsyncGenerator, Optional

from whofunds.config.constants import CANDIDATE_STATUS_ACTIVE, OFFICE_CODES
from whofunds.ingestion.base import BaseFetcher
from whofunds.ingestion.client import FECClient
from whofunds.models.politician import Office, Politician


class CandidateDirectoryFetcher(BaseFetcher[Politician]):
    """
    Fetch active candidates for one office.

    A failed page ends pagination for this office but keeps the candidates
    already collected, including when the very first page fails.
    """

    ENDPOINT = "/candidates/"
    strict_first_page = False

    def __init__(
        self,
        client: FECClient,
        office: Office,
        per_page: Optional[int] = None,
        max_pages: Optional[int] = None,
    ):
        super().__init__(client, per_page=per_page, max_pages=max_pages)
        self.office = office

    async def fetch_data(self, election_year: int) -> AsyncGenerator[dict, None]:
        """
        Yield raw candidate records for ``self.office``.

        Args:
            election_year: Even election year (e.g., 2024)
        """
        params = {
            "election_year": election_year,
            "office": OFFICE_CODES[self.office.value],
            "candidate_status": CANDIDATE_STATUS_ACTIVE,
        }
        self.logger.info(f"Fetching {self.office.value} candidates for {election_year}...")

        async for item in self.paginate(self.ENDPOINT, params):
            yield item

    def transform(self, raw: dict) -> Politician:
        """
        Raises:
            ValueError: If candidate_id is missing or malformed
        """
        if not raw.get("candidate_id") or not isinstance(raw.get("candidate_id"), str):
            raise ValueError(f"Missing candidate_id for {raw.get('name') or 'unknown candidate'}")
        return Politician.from_fec(raw, self.office)
