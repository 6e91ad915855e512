"""
Grading of record and sleeve condition labels.

Collection exports carry free-text condition labels such as
"Very Good Plus (VG+)". Each label is mapped to a badge category by walking
an ordered list of rules; the first rule that matches wins, so the order of
CONDITION_RULES is significant ("very good plus" must be tested before
"very good", "near mint" before "mint" variants and so on).
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ConditionRule:
    category: str
    contains: Tuple[str, ...] = ()
    excludes: Tuple[str, ...] = ()
    equals: Tuple[str, ...] = ()

    def matches(self, label: str) -> bool:
        """Check a lowercased label against this rule."""
        if any(label == value for value in self.equals):
            return True
        if not any(part in label for part in self.contains):
            return False
        return not any(part in label for part in self.excludes)


CONDITION_RULES: Tuple[ConditionRule, ...] = (
    ConditionRule('condition-mint', contains=('mint (m)',)),
    ConditionRule('condition-nm', contains=('near mint', 'nm')),
    ConditionRule('condition-vgp', contains=('very good plus', 'vg+')),
    ConditionRule('condition-vg', contains=('very good',), excludes=('plus',)),
    ConditionRule('condition-gp', contains=('good plus', 'g+')),
    ConditionRule('condition-g', contains=('good (g)',), equals=('good',)),
    # TODO: confirm the bare "f" catch-all with the collection owner; it also
    # matches labels like "Sealed (F/S)"
    ConditionRule('condition-f', contains=('fair', 'f')),
)


def classify_condition(label: str) -> str:
    """
    Map a condition label to its badge category.

    Args:
        label: Free-text condition label from the export

    Returns:
        Category such as "condition-vgp", or "" when blank or unmatched
    """
    if not label:
        return ''

    lowered = label.lower()
    for rule in CONDITION_RULES:
        if rule.matches(lowered):
            return rule.category
    return ''
