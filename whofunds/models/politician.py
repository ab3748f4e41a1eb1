"""
Politician data models.

Defines the structure for federal candidates listed in the FEC directory.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from whofunds.config.constants import (
    CANDIDATE_ID_PATTERN,
    FEC_CANDIDATE_PROFILE_URL,
    INCUMBENT_FLAG,
    PARTY_CODES,
)
from whofunds.models.finance import CamelModel


class Office(str, Enum):
    """Federal office sought."""
    SENATOR = "Senator"
    REPRESENTATIVE = "Representative"


class Party(str, Enum):
    """Political party affiliation."""
    DEMOCRAT = "Democrat"
    REPUBLICAN = "Republican"
    INDEPENDENT = "Independent"
    LIBERTARIAN = "Libertarian"
    GREEN = "Green"
    OTHER = "Other"

    @classmethod
    def from_fec(cls, code: Optional[str]) -> "Party":
        """Map an FEC party code (DEM, REP, ...) or a display name to a Party."""
        if not code or not isinstance(code, str):
            return cls.OTHER
        name = PARTY_CODES.get(code.upper(), code)
        try:
            return cls(name)
        except ValueError:
            return cls.OTHER


class Politician(CamelModel):
    """
    A Senate or House candidate from the FEC candidate directory.

    ``candidate_id`` is the key used for donor lookups, so it is validated
    here and a malformed ID never makes it into the roster.
    """

    id: str
    name: str
    candidate_id: str = Field(..., description="FEC candidate ID (e.g., S2UT00106)")

    party: Party = Party.OTHER
    state: str = Field("Unknown", description="Two-letter state code")
    office: Office
    district: Optional[str] = Field(None, description="House district (None for Senators)")

    is_incumbent: bool = False
    is_candidate: bool = True
    profile_url: str = ""

    @field_validator("candidate_id")
    @classmethod
    def candidate_id_format(cls, value: str) -> str:
        value = value.strip().upper()
        if not CANDIDATE_ID_PATTERN.match(value):
            raise ValueError(f"Invalid FEC candidate ID: {value!r}")
        return value

    @classmethod
    def from_fec(cls, raw: dict, office: Office) -> "Politician":
        """
        Build a Politician from a /candidates/ result.

        Raises:
            pydantic.ValidationError: If candidate_id is absent or malformed
        """
        candidate_id = (raw.get("candidate_id") or "").strip().upper()

        district = None
        if office == Office.REPRESENTATIVE and raw.get("district"):
            try:
                district = str(int(raw["district"]))
            except (TypeError, ValueError):
                district = None

        return cls(
            id=candidate_id,
            name=raw.get("name") or "Unknown Candidate",
            candidate_id=candidate_id,
            party=Party.from_fec(raw.get("party")),
            state=raw.get("state") or "Unknown",
            office=office,
            district=district,
            is_incumbent=raw.get("incumbent_challenge") == INCUMBENT_FLAG,
            is_candidate=True,
            profile_url=FEC_CANDIDATE_PROFILE_URL.format(candidate_id=candidate_id),
        )

    def __str__(self) -> str:
        """Human-readable representation."""
        title = "Sen." if self.office == Office.SENATOR else "Rep."
        district_str = f" (District {self.district})" if self.district else ""
        return f"{title} {self.name} ({self.party.value}-{self.state}){district_str}"


class RosterStats(CamelModel):
    total: int = 0
    senators: int = 0
    representatives: int = 0
    senator_counts_by_state: dict[str, int] = Field(default_factory=dict)


class RosterResult(CamelModel):
    """Combined Senate + House roster as served to the politician picker."""
    politicians: list[Politician] = Field(default_factory=list)
    stats: RosterStats = Field(default_factory=RosterStats)
    is_mock_data: bool = False
    cached: bool = False
    error: Optional[str] = None
    fetched_at: Optional[datetime] = None
