"""
Contribution normalization.

Turns one raw Schedule A record into a ``NormalizedContribution``.
Nothing here raises: missing or malformed fields fall back to defaults.

Usage:
    from whofunds.services.normalizer import normalize

    contribution = normalize(raw, unknown_industry="Unknown Industry")
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from whofunds.config.constants import ANONYMOUS_DONOR, ZERO
from whofunds.models.finance import NormalizedContribution


def _clean_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_amount(value: Any) -> Decimal:
    """
    Parse a contribution amount.

    Examples:
        >>> parse_amount("250.00")
        Decimal('250.00')
        >>> parse_amount(None)
        Decimal('0')
        >>> parse_amount(-50)
        Decimal('0')
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if not amount.is_finite() or amount < ZERO:
        return ZERO
    return amount


def derive_industry(raw: dict, unknown_industry: Optional[str] = None) -> Optional[str]:
    """Employer, else occupation, else ``unknown_industry``. Never both."""
    return (
        _clean_text(raw.get("contributor_employer"))
        or _clean_text(raw.get("contributor_occupation"))
        or unknown_industry
    )


def normalize(raw: dict, unknown_industry: Optional[str] = None) -> NormalizedContribution:
    """
    Normalize a raw FEC contribution.

    Args:
        raw: Schedule A record (contributor_name, contribution_receipt_amount,
             contributor_employer, contributor_occupation)
        unknown_industry: Label to use when neither employer nor occupation
             is present (None leaves industry absent)

    Returns:
        NormalizedContribution
    """
    if not isinstance(raw, dict):
        raw = {}
    return NormalizedContribution(
        donor_name=_clean_text(raw.get("contributor_name")) or ANONYMOUS_DONOR,
        amount=parse_amount(raw.get("contribution_receipt_amount")),
        industry=derive_industry(raw, unknown_industry),
    )
