from decimal import Decimal

from whofunds.models.finance import AggregatedDonor
from whofunds.services.impact import (
    DEFAULT_IMPACT_TEXT,
    INDUSTRY_IMPACTS,
    build_impact_summary,
    dominant_industry,
    industry_breakdown,
)


def donor(name, amount, industry=None):
    return AggregatedDonor(name=name, amount=Decimal(amount), industry=industry)


def test_dominant_industry_sums_across_donors():
    donors = [
        donor("Exxon Mobil", 90, "Energy"),
        donor("Goldman Sachs", 80, "Finance/Insurance"),
        donor("Chevron Corp", 20, "Energy"),
        donor("Bank of America", 25, "Finance/Insurance"),
    ]
    assert dominant_industry(donors) == "Energy"


def test_dominant_industry_ignores_unknown():
    donors = [donor("SMITH, JOHN", 1000), donor("Apple Inc", 10, "Technology")]
    assert dominant_industry(donors) == "Technology"


def test_tie_goes_to_first_seen():
    donors = [donor("A", 50, "Health"), donor("B", 50, "Defense")]
    assert dominant_industry(donors) == "Health"


def test_known_industry_text():
    summary = build_impact_summary([donor("Boeing Co", 100, "Defense")])
    assert summary.dominant_industry == "Defense"
    assert summary.text == INDUSTRY_IMPACTS["Defense"]


def test_generic_industry_text():
    summary = build_impact_summary([donor("Altria Group", 100, "Tobacco")])
    assert summary.dominant_industry == "Tobacco"
    assert "from the tobacco sector" in summary.text


def test_no_industry_uses_default_text():
    summary = build_impact_summary([])
    assert summary.dominant_industry is None
    assert summary.text == DEFAULT_IMPACT_TEXT


def test_industry_breakdown_folds_tail_into_other():
    donors = [donor(f"D{i}", 100 - i, f"Industry {i}") for i in range(10)] + [donor("X", 5)]
    shares = industry_breakdown(donors, top=3)

    assert [s.industry for s in shares] == ["Industry 0", "Industry 1", "Industry 2", "Other"]
    assert shares[-1].amount == sum(Decimal(100 - i) for i in range(3, 10)) + 5
