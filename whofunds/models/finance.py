"""
Pydantic models for campaign finance data.

These models represent contributions and aggregated donors built from
FEC Schedule A (itemized receipts) records.
"""
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Optional
from decimal import Decimal

from whofunds.config.constants import ZERO

# Dollar amounts stay Decimal in Python and go out as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base for models serialized to the front-end with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NormalizedContribution(BaseModel):
    """
    One Schedule A record reduced to what the aggregator needs.
    """
    donor_name: str = Field(..., min_length=1, description="Contributor name")
    amount: Decimal = Field(ZERO, description="Contribution amount in dollars")
    industry: Optional[str] = Field(None, description="Employer or occupation")

    @field_validator("amount")
    @classmethod
    def amount_not_negative(cls, value: Decimal) -> Decimal:
        return value if value > ZERO else ZERO

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "donor_name": "SMITH, JOHN",
                "amount": "2500.00",
                "industry": "Tech Corp",
            }
        }
    )


class AggregatedDonor(CamelModel):
    """
    Running total for one donor across all contributions in a lookup.
    """
    name: str
    amount: Money = Field(ZERO, ge=0)
    industry: Optional[str] = None


class Committee(BaseModel):
    """FEC committee that receives contributions for a candidate."""
    committee_id: str = Field(..., description="FEC Committee ID (e.g., C00401224)")
    name: Optional[str] = None
    designation: Optional[str] = Field(None, description="P=principal, A=authorized, ...")


class DonorResult(CamelModel):
    """
    Outcome of one donor lookup.

    An empty ``donors`` list with ``is_mock_data`` False is an authoritative
    "no donors reported" answer.
    """
    candidate_id: str
    cycle: int
    donors: list[AggregatedDonor] = Field(default_factory=list)
    small_donations_total: Money = ZERO
    is_mock_data: bool = False
    partial: bool = False
    message: Optional[str] = None
    committees: list[str] = Field(default_factory=list)
