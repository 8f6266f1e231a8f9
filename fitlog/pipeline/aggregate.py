from __future__ import annotations
import math
from typing import Dict, List, Tuple
from ..models import MealTemplateCandidate

SUMMED_FIELDS = ("serving_size", "calories", "protein", "carbs", "fat")

def _finite_sum(a: float, b: float) -> float:
    total = a + b
    return total if math.isfinite(total) else 0.0

def aggregate_candidates(items: List[MealTemplateCandidate]) -> List[MealTemplateCandidate]:
    """Combine repeated items of one paste, keyed by (normalized_name, unit).

    The first occurrence keeps its display name and unit; later ones only
    add to its numbers. A sum that overflows to infinity is coerced to 0,
    like any other unusable number. Output is in first-seen order.
    """
    groups: Dict[Tuple[str, str], MealTemplateCandidate] = {}
    for it in items:
        key = (it.normalized_name, it.serving_unit)
        base = groups.get(key)
        if base is None:
            groups[key] = it.model_copy()
            continue
        groups[key] = base.model_copy(
            update={f: _finite_sum(getattr(base, f), getattr(it, f)) for f in SUMMED_FIELDS}
        )
    return list(groups.values())
