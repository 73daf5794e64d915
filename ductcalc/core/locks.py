"""Lock combination rules for DuctCalc.

Locking freezes a parameter so the engine may not recompute it.  Some
combinations of three locked inputs leave the duct relations with no
free variable and are refused.
"""

from __future__ import annotations

from typing import Iterable

from ductcalc.core.parameters import EDITABLE_SLOTS, Slot
from ductcalc.utils.validation import ValidationResult

# (locked set, parameter key, message); first match wins
OVERDETERMINED_SETS: tuple[tuple[frozenset[Slot], str, str], ...] = (
    (
        frozenset({Slot.FLOW_RATE, Slot.HEAD_LOSS, Slot.EQUIVALENT_DIAMETER}),
        "locks",
        "Error: Cannot lock Flow Rate, Head Loss, and Equivalent Diameter together "
        "(overdetermined system)",
    ),
    (
        frozenset({Slot.EQUIVALENT_DIAMETER, Slot.DUCT_X, Slot.DUCT_Y}),
        "locks",
        "Error: Cannot lock Equivalent Diameter, Duct Size X, and Duct Size Y together "
        "(inconsistent geometry)",
    ),
)


def validate_locks(locked: Iterable[int]) -> ValidationResult:
    """Check a set of locked slots.

    Only editable slots (0–5) are considered.  Fewer than three locks is
    always valid; otherwise each overdetermined set contained in the locks
    is reported, in rule order.
    """
    result = ValidationResult()
    editable = {Slot(i) for i in locked if i in EDITABLE_SLOTS}
    if len(editable) < 3:
        return result

    for combination, parameter, message in OVERDETERMINED_SETS:
        if combination <= editable:
            result.error(parameter, message, value=sorted(int(s) for s in combination))
    return result


def lock_error(locked: Iterable[int]) -> str:
    """First lock rule violated by *locked*, or an empty string."""
    errors = validate_locks(locked).errors
    return errors[0].message if errors else ""
