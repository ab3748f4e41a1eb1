"""
"What this means for you" summary of a donor list.

Finds the industry that gave the most and pairs it with a short explanation
of the policy areas that money tends to touch.
"""
from decimal import Decimal
from typing import Iterable, Optional

from whofunds.config.constants import ZERO
from whofunds.models.finance import AggregatedDonor, CamelModel, Money

UNKNOWN_INDUSTRY_LABEL = "Unknown"
OTHER_INDUSTRIES_LABEL = "Other"

DEFAULT_IMPACT_TEXT = (
    "Political donations can significantly influence a politician's policy priorities "
    "and voting patterns. Large donors often gain increased access to elected officials, "
    "potentially shaping legislation in ways that benefit their interests. This can affect "
    "everything from healthcare costs and environmental regulations to tax policy and "
    "consumer protections that impact your daily life."
)

INDUSTRY_IMPACTS = {
    "Finance/Insurance": (
        "The significant funding from the finance and insurance sector may influence the "
        "politician's stance on financial regulations, banking oversight, and tax policies "
        "affecting investment income. This could impact consumer protections in financial "
        "services and the overall regulatory environment for Wall Street."
    ),
    "Health": (
        "With substantial backing from the healthcare industry, the politician may take "
        "positions on healthcare policy that align with industry interests. This could affect "
        "healthcare costs, insurance coverage requirements, pharmaceutical pricing, and the "
        "structure of healthcare delivery systems that directly impact your medical expenses "
        "and care options."
    ),
    "Energy": (
        "Strong support from the energy sector suggests the politician may favor policies "
        "beneficial to these donors, potentially affecting environmental regulations, climate "
        "initiatives, and energy production subsidies. This could impact everything from the "
        "air quality in your community to energy prices and job opportunities in traditional "
        "or renewable energy sectors."
    ),
    "Technology": (
        "Backing from tech companies may influence the politician's approach to internet "
        "regulation, data privacy laws, antitrust enforcement, and technology sector taxation. "
        "This could affect your online privacy, the services available to you, and the "
        "competitive landscape of the digital economy."
    ),
    "Defense": (
        "Significant funding from defense contractors may lead the politician to support "
        "higher defense budgets and military interventions. This could influence national "
        "security policy, military spending priorities, and international relations in ways "
        "that affect both tax dollars and global stability."
    ),
}

GENERIC_IMPACT_TEMPLATE = (
    "The significant funding from the {industry} sector may influence the politician's "
    "policy positions in ways that directly affect regulations, tax policies, and government "
    "priorities related to this industry. This could impact your daily life through changes "
    "in consumer protections, available services, and economic opportunities."
)


class IndustryShare(CamelModel):
    industry: str
    amount: Money


class ImpactSummary(CamelModel):
    dominant_industry: Optional[str] = None
    text: str = DEFAULT_IMPACT_TEXT


def _industry_totals(donors: Iterable[AggregatedDonor], skip_unknown: bool) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for donor in donors:
        industry = donor.industry
        if not industry:
            if skip_unknown:
                continue
            industry = UNKNOWN_INDUSTRY_LABEL
        totals[industry] = totals.get(industry, ZERO) + donor.amount
    return totals


def dominant_industry(donors: Iterable[AggregatedDonor]) -> Optional[str]:
    """
    Industry with the largest combined amount.

    Donors without an industry are ignored. On a tie the industry seen
    first wins.
    """
    best, best_amount = None, ZERO
    for industry, amount in _industry_totals(donors, skip_unknown=True).items():
        if amount > best_amount:
            best, best_amount = industry, amount
    return best


def impact_text(industry: Optional[str]) -> str:
    if not industry:
        return DEFAULT_IMPACT_TEXT
    return INDUSTRY_IMPACTS.get(industry) or GENERIC_IMPACT_TEMPLATE.format(industry=industry.lower())


def build_impact_summary(donors: Iterable[AggregatedDonor]) -> ImpactSummary:
    industry = dominant_industry(donors)
    return ImpactSummary(dominant_industry=industry, text=impact_text(industry))


def industry_breakdown(donors: Iterable[AggregatedDonor], top: int = 8) -> list[IndustryShare]:
    """
    Amount per industry, largest first.

    Industries beyond ``top`` are folded into one "Other" share. Donors
    without an industry are counted as "Unknown".
    """
    ranked = sorted(
        _industry_totals(donors, skip_unknown=False).items(),
        key=lambda item: item[1],
        reverse=True,
    )
    shares = [IndustryShare(industry=name, amount=amount) for name, amount in ranked[:top]]

    rest = sum((amount for _, amount in ranked[top:]), ZERO)
    if rest > ZERO:
        shares.append(IndustryShare(industry=OTHER_INDUSTRIES_LABEL, amount=rest))
    return shares
