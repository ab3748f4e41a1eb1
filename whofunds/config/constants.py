"""
Application-wide constants.

API endpoints, identifier formats, and other magic values live here.
"""
import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

# API Base URLs
FEC_BASE_URL = "https://api.open.fec.gov/v1"
FEC_CANDIDATE_PROFILE_URL = "https://www.fec.gov/data/candidate/{candidate_id}/"

# FEC candidate IDs: office letter (House, Senate, President) + alphanumerics
CANDIDATE_ID_PATTERN = re.compile(r"^[HSP][A-Z0-9]+$")

# FEC office codes used by the /candidates/ directory
OFFICE_CODES = {
    "Senator": "S",
    "Representative": "H",
}

# FEC party codes -> display names
PARTY_CODES = {
    "DEM": "Democrat",
    "REP": "Republican",
    "IND": "Independent",
    "LIB": "Libertarian",
    "GRE": "Green",
}

# Donor pipeline labels
ANONYMOUS_DONOR = "Anonymous"
SMALL_DONATIONS_NAME = "Small Individual Donations"
SMALL_DONATIONS_INDUSTRY = "Grassroots"

ZERO = Decimal("0")

# Roster fetch only wants active candidates
CANDIDATE_STATUS_ACTIVE = "C"
INCUMBENT_FLAG = "I"


def normalize_candidate_id(candidate_id: Optional[str]) -> Optional[str]:
    """
    Upper-case and validate an FEC candidate ID.

    Returns:
        The canonical ID, or None when it is absent or malformed
    """
    if not candidate_id or not isinstance(candidate_id, str):
        return None
    cleaned = candidate_id.strip().upper()
    if CANDIDATE_ID_PATTERN.match(cleaned):
        return cleaned
    return None


# Election cycles - calculated dynamically
# FEC two-year periods are named after their (even) closing year
def current_transaction_period(year: Optional[int] = None) -> int:
    """Two-year transaction period containing the given (or current) year."""
    year = year or datetime.now().year
    return year if year % 2 == 0 else year + 1


def current_election_year(year: Optional[int] = None) -> int:
    """Most recent even election year, used to scope the roster."""
    year = year or datetime.now().year
    return year if year % 2 == 0 else year - 1
