from __future__ import annotations
import re, logging
from typing import List, Optional
from ..config import ParserConfig, DEFAULT_CONFIG
from ..models import ExerciseTemplateCandidate
from .extract import strip_bullet

log = logging.getLogger(__name__)

# Supino Reto Barra 4x6-10
WORKOUT_PAT = re.compile(
    r"^(?P<name>.+?)\s+(?P<sets>\d+)\s*[x×]\s*(?P<reps>\d+(?:\s*-\s*\d+)?|falha)(?![\dx×])(?P<rest>.*)$",
    re.I,
)

def _resolve_reps(spec: str) -> int:
    if spec.lower() == "falha":
        return 0
    try:
        return int(spec.split("-")[0].strip())
    except ValueError:
        return 0

def parse_workout_line(line: str, config: Optional[ParserConfig] = None) -> Optional[ExerciseTemplateCandidate]:
    cfg = config or DEFAULT_CONFIG
    body, _ = strip_bullet(line or "", cfg)
    m = WORKOUT_PAT.match(body)
    if not m:
        return None
    name = m.group("name").strip()
    if not name:
        return None
    reps = m.group("reps")
    return ExerciseTemplateCandidate(
        name=name,
        sets=int(m.group("sets")),
        reps=_resolve_reps(reps),
        notes=f"Reps: {reps}",
        technique=m.group("rest").strip(" \t-–,;()"),
    )

def parse_workout_text(text: str, config: Optional[ParserConfig] = None) -> List[ExerciseTemplateCandidate]:
    cfg = config or DEFAULT_CONFIG
    exercises = []
    for ln in (l.strip() for l in (text or "").splitlines()):
        if not ln:
            continue
        ex = parse_workout_line(ln, cfg)
        if ex is None:
            log.debug("Skipping unrecognized workout line: %r", ln)
            continue
        exercises.append(ex)
    return exercises
