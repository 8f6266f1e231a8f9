from __future__ import annotations
import uuid, logging
from typing import List, Optional, Sequence
from ..config import ParserConfig, DEFAULT_CONFIG
from ..models import (
    MealTemplateCandidate, ExerciseTemplateCandidate, MealTemplate, ExerciseTemplate,
    MealEntry, ReconcileResult, MealMergeResult, ExerciseMergeResult,
)
from .normalize import normalize_name

log = logging.getLogger(__name__)

FLOAT_EPS = 1e-9

def _new_id() -> str:
    return uuid.uuid4().hex

def template_key(tpl, cfg: ParserConfig) -> str:
    return tpl.normalized_name or normalize_name(tpl.name, cfg)

def caloric_density(calories: float, serving_size: float) -> float:
    if serving_size <= 0:
        return 0.0
    return calories / serving_size

def is_similar_density(entry_calories: float, entry_quantity: float,
                       tpl_calories: float, tpl_serving: float,
                       tolerance: float = 0.10) -> bool:
    # porção não positiva não permite comparar densidade: reaproveita
    if entry_quantity <= 0 or tpl_serving <= 0:
        return True
    new = caloric_density(entry_calories, entry_quantity)
    cand = caloric_density(tpl_calories, tpl_serving)
    if new == 0 and cand == 0:
        return True
    if new == 0 or cand == 0:
        return False
    return abs(new - cand) / cand <= tolerance + FLOAT_EPS

def find_or_create_template(entry: MealEntry, templates: Sequence[MealTemplate],
                            config: Optional[ParserConfig] = None) -> ReconcileResult:
    """Reuse the first same-name template with a similar caloric density."""
    cfg = config or DEFAULT_CONFIG
    key = normalize_name(entry.name, cfg)
    candidates = [t for t in templates if template_key(t, cfg) == key]
    for tpl in candidates:
        if is_similar_density(entry.calories, entry.quantity, tpl.calories, tpl.serving_size,
                              cfg.density_tolerance):
            return ReconcileResult(reuse=tpl)
    if candidates:
        log.info("New variant of %r: density differs from %d template(s)", key, len(candidates))
    return ReconcileResult(create_new=True)

def template_from_entry(entry: MealEntry, config: Optional[ParserConfig] = None) -> MealTemplate:
    cfg = config or DEFAULT_CONFIG
    name = " ".join(entry.name.split())
    return MealTemplate(
        id=_new_id(),
        name=name,
        normalized_name=normalize_name(name, cfg),
        serving_size=entry.quantity,
        serving_unit=entry.unit,
        calories=entry.calories,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
    )

def merge_meal_templates(candidates: Sequence[MealTemplateCandidate], existing: Sequence[MealTemplate],
                         config: Optional[ParserConfig] = None) -> MealMergeResult:
    cfg = config or DEFAULT_CONFIG
    seen = {template_key(t, cfg) for t in existing}
    templates: List[MealTemplate] = list(existing)
    added, skipped = [], []
    for c in candidates:
        key = c.normalized_name or normalize_name(c.original_name, cfg)
        if key in seen:
            skipped.append(c.original_name)
            continue
        seen.add(key)
        tpl = MealTemplate(
            id=_new_id(),
            name=c.original_name,
            normalized_name=key,
            serving_size=c.serving_size,
            serving_unit=c.serving_unit,
            calories=c.calories,
            protein=c.protein,
            carbs=c.carbs,
            fat=c.fat,
        )
        templates.append(tpl)
        added.append(tpl)
    return MealMergeResult(templates=templates, added=added, skipped=skipped)

def merge_exercise_templates(candidates: Sequence[ExerciseTemplateCandidate], existing: Sequence[ExerciseTemplate],
                             config: Optional[ParserConfig] = None) -> ExerciseMergeResult:
    cfg = config or DEFAULT_CONFIG
    seen = {template_key(t, cfg) for t in existing}
    templates: List[ExerciseTemplate] = list(existing)
    added, skipped = [], []
    for c in candidates:
        key = normalize_name(c.name, cfg)
        if key in seen:
            skipped.append(c.name)
            continue
        seen.add(key)
        tpl = ExerciseTemplate(id=_new_id(), name=c.name, normalized_name=key, sets=c.sets,
                               reps=c.reps, technique=c.technique, notes=c.notes)
        templates.append(tpl)
        added.append(tpl)
    return ExerciseMergeResult(templates=templates, added=added, skipped=skipped)
