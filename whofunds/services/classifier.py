"""
Donor type classification.

Donors are labelled by keyword matches against their name. Rules are
checked in order and the first match wins, so "Workers Action Fund" is a
PAC, not a Union.
"""
from collections import OrderedDict
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel

from whofunds.config.constants import ZERO
from whofunds.models.finance import AggregatedDonor


class ClassificationRule(BaseModel):
    """A donor type and the name fragments that identify it."""
    label: str
    keywords: tuple[str, ...]

    def matches(self, name: str) -> bool:
        return any(keyword in name for keyword in self.keywords)


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(label="Corporate", keywords=("Inc", "Corp", "LLC", "Co", "Company", "Group")),
    ClassificationRule(label="PAC", keywords=("PAC", "Committee", "Action", "Fund", "America", "Citizens")),
    ClassificationRule(label="Union", keywords=("Union", "Workers", "Labor", "Brotherhood", "Association")),
    ClassificationRule(label="University", keywords=("University", "College", "School")),
    ClassificationRule(label="Government", keywords=("Government", "State of", "Department", "Federal")),
)

DEFAULT_LABEL = "Individual/Other"


class DonorClassifier:
    """
    Ordered keyword classifier.

    Matching is a plain case-sensitive substring test, which means short
    keywords like "Co" also hit "Costco" or "Coalition".
    """

    def __init__(
        self,
        rules: Optional[Sequence[ClassificationRule]] = None,
        default_label: str = DEFAULT_LABEL,
    ):
        self.rules = tuple(rules) if rules is not None else DEFAULT_RULES
        self.default_label = default_label

    def classify(self, name: str) -> str:
        for rule in self.rules:
            if rule.matches(name):
                return rule.label
        return self.default_label

    def categorize(self, donors: Iterable[AggregatedDonor]) -> dict[str, Decimal]:
        """
        Total amount per donor type, in rule order, zero categories dropped.
        """
        totals: "OrderedDict[str, Decimal]" = OrderedDict(
            (label, ZERO) for label in [r.label for r in self.rules] + [self.default_label]
        )
        for donor in donors:
            totals[self.classify(donor.name)] += donor.amount
        return {label: amount for label, amount in totals.items() if amount > ZERO}
