"""
Donor aggregation.

Folds normalized contributions into per-donor totals. Contributions at or
below the small-donation threshold are pooled into one synthetic
"Small Individual Donations" entry instead of getting their own row.

Donor names are matched with a replaceable key function. The default,
``exact_name``, matches names exactly (case-sensitive), so "Apple Inc" and
"Apple Inc." stay separate donors. ``casefold_name`` is a looser policy.
"""
import re
from decimal import Decimal
from typing import Callable, Iterable, Optional, Union

from whofunds.config.constants import (
    SMALL_DONATIONS_INDUSTRY,
    SMALL_DONATIONS_NAME,
    ZERO,
)
from whofunds.models.finance import AggregatedDonor, NormalizedContribution

NameKey = Callable[[str], str]

_WHITESPACE = re.compile(r"\s+")


def exact_name(name: str) -> str:
    return name


def casefold_name(name: str) -> str:
    """Case-insensitive key with collapsed whitespace and no trailing punctuation."""
    return _WHITESPACE.sub(" ", name).strip().rstrip(".,;").casefold()


NAME_MATCHING: dict[str, NameKey] = {
    "exact": exact_name,
    "casefold": casefold_name,
}


def get_name_key(policy: str) -> NameKey:
    """Look up a name matching policy by its settings name."""
    try:
        return NAME_MATCHING[policy.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown donor name matching policy {policy!r}; "
            f"expected one of {sorted(NAME_MATCHING)}"
        ) from None


class DonorAggregator:
    """
    Accumulates donor totals across one lookup.

    An industry is attached to a donor the first time a contribution with
    an industry is seen and is never overwritten afterwards.
    """

    def __init__(
        self,
        small_donation_threshold: Union[Decimal, float, int, str, None] = 0,
        key: NameKey = exact_name,
    ):
        self.threshold = Decimal(str(small_donation_threshold or 0))
        self.key = key
        self.small_donations_total = ZERO
        self.contribution_count = 0
        # Insertion order is the tie-break for equal amounts
        self._donors: dict[str, dict] = {}

    def _add_to_donor(self, name: str, amount: Decimal, industry: Optional[str]):
        entry = self._donors.get(self.key(name))
        if entry is None:
            entry = {"name": name, "amount": ZERO, "industry": None}
            self._donors[self.key(name)] = entry
        entry["amount"] += amount
        if entry["industry"] is None:
            entry["industry"] = industry

    def add(self, contribution: NormalizedContribution):
        """Fold one contribution into the running totals."""
        self.contribution_count += 1
        if self.threshold > ZERO and contribution.amount <= self.threshold:
            self.small_donations_total += contribution.amount
            return
        self._add_to_donor(contribution.donor_name, contribution.amount, contribution.industry)

    def extend(self, contributions: Iterable[NormalizedContribution]):
        for contribution in contributions:
            self.add(contribution)

    def merge(self, other: "DonorAggregator"):
        """
        Merge another aggregator's totals into this one.

        The other aggregator's donors are applied in their insertion order,
        so merging per-committee aggregators in a fixed order is deterministic.
        """
        for entry in other._donors.values():
            self._add_to_donor(entry["name"], entry["amount"], entry["industry"])
        self.small_donations_total += other.small_donations_total
        self.contribution_count += other.contribution_count

    @property
    def total(self) -> Decimal:
        """Sum of every amount seen, bucket included."""
        return sum((e["amount"] for e in self._donors.values()), ZERO) + self.small_donations_total

    def results(self, limit: Optional[int] = None) -> list[AggregatedDonor]:
        """
        Donors sorted by amount, largest first.

        Args:
            limit: Keep only the top N entries (None keeps all)
        """
        donors = [
            AggregatedDonor(name=e["name"], amount=e["amount"], industry=e["industry"])
            for e in self._donors.values()
        ]
        if self.small_donations_total > ZERO:
            donors.append(AggregatedDonor(
                name=SMALL_DONATIONS_NAME,
                amount=self.small_donations_total,
                industry=SMALL_DONATIONS_INDUSTRY,
            ))

        # sorted() is stable, so ties keep first-insertion order
        donors = sorted(donors, key=lambda d: d.amount, reverse=True)
        if limit is not None:
            donors = donors[:limit]
        return donors


def aggregate(
    contributions: Iterable[NormalizedContribution],
    small_donation_threshold: Union[Decimal, float, int, str, None] = 0,
    key: NameKey = exact_name,
) -> tuple[list[AggregatedDonor], Decimal]:
    """
    Aggregate contributions in a single pass.

    Args:
        contributions: Normalized contributions, in source order
        small_donation_threshold: Amounts at or below this go to the
            small-donation bucket (0 disables the bucket)
        key: Donor name matching policy

    Returns:
        (donors sorted by amount descending, small donations total)

    Examples:
        >>> donors, small = aggregate(items, small_donation_threshold=200)
    """
    aggregator = DonorAggregator(small_donation_threshold, key=key)
    aggregator.extend(contributions)
    return aggregator.results(), aggregator.small_donations_total
