"""
Bundled example data served when the FEC API cannot be used.

Amounts are illustrative, not real filings. Responses built from this
module are always flagged ``is_mock_data``.
"""
from decimal import Decimal

from whofunds.models.finance import AggregatedDonor
from whofunds.models.politician import Office, Party, Politician


def _donors(*rows: tuple[str, int, str]) -> list[AggregatedDonor]:
    return [AggregatedDonor(name=name, amount=Decimal(amount), industry=industry) for name, amount, industry in rows]


MOCK_DONORS: dict[str, list[AggregatedDonor]] = {
    # Bernie Sanders
    "S4VT00033": _donors(
        ("University of California", 99548, "Education"),
        ("Alphabet Inc", 81255, "Technology"),
        ("Amazon.com", 62412, "Retail"),
        ("Microsoft Corp", 53241, "Technology"),
        ("Apple Inc", 45632, "Technology"),
        ("Kaiser Permanente", 41235, "Health"),
        ("US Government", 38756, "Government"),
        ("AT&T Inc", 32145, "Telecommunications"),
        ("State of California", 29876, "Government"),
        ("Walmart Inc", 26543, "Retail"),
    ),
    # Ted Cruz
    "S2TX00312": _donors(
        ("Club for Growth", 113456, "Conservative Policy"),
        ("Exxon Mobil", 98765, "Energy"),
        ("Goldman Sachs", 87654, "Finance/Insurance"),
        ("Koch Industries", 76543, "Energy"),
        ("Boeing Co", 65432, "Defense"),
        ("AT&T Inc", 54321, "Telecommunications"),
        ("Lockheed Martin", 43210, "Defense"),
        ("Chevron Corp", 32109, "Energy"),
        ("Bank of America", 21098, "Finance/Insurance"),
        ("Raytheon Technologies", 10987, "Defense"),
    ),
    # Elizabeth Warren
    "S2MA00170": _donors(
        ("EMILY's List", 105432, "Women's Issues"),
        ("Harvard University", 94321, "Education"),
        ("Alphabet Inc", 83210, "Technology"),
        ("Microsoft Corp", 72109, "Technology"),
        ("Apple Inc", 61098, "Technology"),
        ("Kaiser Permanente", 50987, "Health"),
        ("University of California", 49876, "Education"),
        ("Amazon.com", 38765, "Retail"),
        ("Walt Disney Co", 27654, "Entertainment"),
        ("Massachusetts General Hospital", 16543, "Health"),
    ),
    # Mitch McConnell
    "S2KY00012": _donors(
        ("Blackstone Group", 119876, "Finance/Insurance"),
        ("Kindred Healthcare", 108765, "Health"),
        ("UBS AG", 97654, "Finance/Insurance"),
        ("JPMorgan Chase & Co", 86543, "Finance/Insurance"),
        ("Humana Inc", 75432, "Health"),
        ("Altria Group", 64321, "Tobacco"),
        ("FedEx Corp", 53210, "Transportation"),
        ("General Electric", 42109, "Manufacturing"),
        ("Citigroup Inc", 31098, "Finance/Insurance"),
        ("Brown-Forman Corp", 20987, "Food & Beverage"),
    ),
    # Alexandria Ocasio-Cortez
    "H8NY15148": _donors(
        ("Alphabet Inc", 89765, "Technology"),
        ("University of California", 78654, "Education"),
        ("City University of New York", 67543, "Education"),
        ("Amazon.com", 56432, "Retail"),
        ("Apple Inc", 45321, "Technology"),
        ("Microsoft Corp", 34210, "Technology"),
        ("Kaiser Permanente", 23109, "Health"),
        ("New York University", 12098, "Education"),
        ("Columbia University", 10987, "Education"),
        ("Walt Disney Co", 9876, "Entertainment"),
    ),
}


def _politician(candidate_id, name, party, state, office, district=None) -> Politician:
    return Politician.from_fec(
        {
            "candidate_id": candidate_id,
            "name": name,
            "party": party,
            "state": state,
            "district": district,
            "incumbent_challenge": "I",
        },
        office,
    )


MOCK_POLITICIANS: list[Politician] = [
    _politician("S4VT00033", "SANDERS, BERNARD", "IND", "VT", Office.SENATOR),
    _politician("S2TX00312", "CRUZ, RAFAEL EDWARD \"TED\"", "REP", "TX", Office.SENATOR),
    _politician("S2MA00170", "WARREN, ELIZABETH", "DEM", "MA", Office.SENATOR),
    _politician("S2KY00012", "MCCONNELL, MITCH", "REP", "KY", Office.SENATOR),
    _politician("H8NY15148", "OCASIO-CORTEZ, ALEXANDRIA", "DEM", "NY", Office.REPRESENTATIVE, "14"),
]


def get_mock_donors(candidate_id: str) -> list[AggregatedDonor]:
    """Copy of the example donors for a candidate, [] if unknown."""
    return [donor.model_copy() for donor in MOCK_DONORS.get(candidate_id, [])]


def get_mock_politicians() -> list[Politician]:
    return [politician.model_copy() for politician in MOCK_POLITICIANS]
