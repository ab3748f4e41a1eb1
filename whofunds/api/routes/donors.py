"""
Donor endpoint
──────────────────────────────────────────────────────────────────────────────
GET /donors?cid=<FEC candidate ID>&cycle=<year>

Answers with the ranked donor list plus the breakdowns the front-end draws
(donor types, industries) and the "what this means" summary.

Status codes: 400 bad cid, 404 no committees (strict mode only),
500 no API key with mock fallback disabled, 502 OpenFEC failure.
Zero donors is a 200.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import Field

from whofunds.api.dependencies import get_classifier, get_donor_pipeline
from whofunds.errors import InvalidInputError
from whofunds.models.finance import DonorResult, Money
from whofunds.services.classifier import DonorClassifier
from whofunds.services.donors import DonorPipeline
from whofunds.services.impact import (
    ImpactSummary,
    IndustryShare,
    build_impact_summary,
    industry_breakdown,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["donors"])


class DonorsResponse(DonorResult):
    donor_types: dict[str, Money] = Field(default_factory=dict)
    industries: list[IndustryShare] = Field(default_factory=list)
    impact: ImpactSummary = Field(default_factory=ImpactSummary)


def build_donors_response(result: DonorResult, classifier: DonorClassifier) -> DonorsResponse:
    return DonorsResponse(
        **result.model_dump(),
        donor_types=classifier.categorize(result.donors),
        industries=industry_breakdown(result.donors),
        impact=build_impact_summary(result.donors),
    )


@router.get("/donors", response_model=DonorsResponse, response_model_exclude_none=True)
async def get_donors(
    cid: Optional[str] = Query(None, description="FEC candidate ID (e.g. S2UT00106)"),
    cycle: Optional[int] = Query(None, ge=1976, le=2100, description="Election year"),
    pipeline: DonorPipeline = Depends(get_donor_pipeline),
    classifier: DonorClassifier = Depends(get_classifier),
):
    """Top donors for one candidate."""
    if not cid:
        raise InvalidInputError("Missing candidate ID (cid)")

    logger.info(f"Donors API request - cid: {cid}, cycle: {cycle}")
    result = await pipeline.run(cid, cycle=cycle)
    return build_donors_response(result, classifier)
