from __future__ import annotations
import re, math, logging
from typing import Callable, List, NamedTuple, Optional, Tuple
from ..config import ParserConfig, DEFAULT_CONFIG
from ..models import MealTemplateCandidate
from .normalize import normalize_name, fold_accents
from .aggregate import aggregate_candidates

log = logging.getLogger(__name__)

UNIT_MAP = {
    r"g|gr|grs|gramas?": "g",
    r"kg|quilos?": "kg",
    r"ml|mls": "ml",
    r"l|litros?": "l",
    r"unidades?|un|und": "un",
    r"x[ií]caras?": "xícara",
    r"colher(es)?\s*\(?de\s*sopa\)?": "colher_sopa",
    r"colher(es)?\s*\(?de\s*ch[aá]\)?": "colher_cha",
    r"colher(es)?|col": "colher",
    r"sach[eê]s?": "sachê",
}
UNIT_PATTERNS = [(re.compile(pat, re.I), out) for pat, out in UNIT_MAP.items()]

NUM = r"\d+(?:[.,]\d+)?"
QTY = rf"{NUM}(?:\s*/\s*\d+)?"
FRACTION_PAT = re.compile(r"(\d+)\s*/\s*(\d+)")
QTY_PAT = re.compile(QTY)
# "colher de sopa" e "colher (de chá)" são uma unidade só
UNIT_WORD = r"colher(?:es)?\s*\(?de\s+(?:sopa|ch[aá])\)?|[^\W\d_]+"

# - 3 ovos cozidos: 210 Kcal | 18g proteína | 1g carboidrato | 15g gordura
MEAL_LINE_PAT = re.compile(
    rf"^(?P<name>.+?)\s*:\s*"
    rf"(?P<calories>{NUM})\s*kcal\s*\|\s*"
    rf"(?P<protein>{NUM})\s*g\s*(?:de\s+)?prote[ií]nas?\s*\|\s*"
    rf"(?P<carbs>{NUM})\s*g\s*(?:de\s+)?carboidratos?\s*\|\s*"
    rf"(?P<fat>{NUM})\s*g\s*(?:de\s+)?gorduras?",
    re.I,
)
POSSESSIVE_PAT = re.compile(
    rf"^(?P<qty>{QTY})\s*(?P<unit>{UNIT_WORD})\.?\s+(?:de|da|do|das|dos)\s+(?P<food>.+)$", re.I
)
PAREN_PAT = re.compile(r"^(?P<food>[^()]+?)\s*\((?P<inner>[^()]*)\)\s*(?P<after>.*)$")
INNER_QTY_PAT = re.compile(rf"(?P<qty>{QTY})\s*(?:(?P<unit>{UNIT_WORD})\.?)?")
LEADING_QTY_PAT = re.compile(rf"^(?P<qty>{QTY})\s*(?P<rest>\S.*)$")
FIRST_WORD_PAT = re.compile(r"^(?P<word>[^\W\d_]+)\.?(?:\s+(?P<rest>.*))?$")


class ServingParse(NamedTuple):
    quantity: float
    unit: str
    food: str


def _to_float(token: str) -> float:
    token = (token or "").strip().replace(",", ".")
    m = FRACTION_PAT.fullmatch(token)
    try:
        value = float(m.group(1)) / float(m.group(2)) if m else float(token)
    except (ValueError, ZeroDivisionError):
        return 0.0
    return value if math.isfinite(value) else 0.0

def _to_quantity(token: str) -> float:
    # quantidade zero ou ilegível vira a porção padrão
    return _to_float(token) or 1.0

def _norm_unit(u: str) -> str:
    u = u.strip().lower().rstrip(".")
    for pat, out in UNIT_PATTERNS:
        if pat.fullmatch(u):
            return out
    if len(u) > 1 and u.endswith("s"):
        return u[:-1]
    return u

def _is_unit(word: str, cfg: ParserConfig) -> bool:
    known = {fold_accents(k.lower()) for k in cfg.unit_keywords}
    return fold_accents(_norm_unit(word)) in known or fold_accents(word.lower()) in known

def strip_bullet(line: str, cfg: ParserConfig) -> Tuple[str, bool]:
    text = line.strip()
    for marker in sorted(cfg.bullet_markers, key=len, reverse=True):
        if marker and text.startswith(marker):
            return text[len(marker):].lstrip(), True
    return text, False


def _match_possessive(name: str, cfg: ParserConfig) -> Optional[ServingParse]:
    m = POSSESSIVE_PAT.match(name)
    if not m or not _is_unit(m.group("unit"), cfg):
        return None
    return ServingParse(_to_quantity(m.group("qty")), _norm_unit(m.group("unit")), m.group("food").strip())

def _match_parenthetical(name: str, cfg: ParserConfig) -> Optional[ServingParse]:
    m = PAREN_PAT.match(name)
    if not m:
        return None
    inner = m.group("inner")
    numbers = QTY_PAT.findall(inner)
    if not numbers:
        return None
    if "+" in inner or len(numbers) > cfg.recipe_number_threshold:
        # receita composta, ex.: (150g carne + 100g abóbora)
        return _match_fallback(name, cfg)
    q = INNER_QTY_PAT.search(inner)
    unit = "un"
    descriptor = inner[q.end():]
    if q.group("unit"):
        if _is_unit(q.group("unit"), cfg):
            unit = _norm_unit(q.group("unit"))
        else:
            descriptor = inner[q.start("unit"):]
    descriptor = " ".join((inner[:q.start()] + " " + descriptor).split())
    food = m.group("food").strip()
    if descriptor:
        food = f"{food} ({descriptor})"
    if m.group("after").strip():
        food = f"{food} {m.group('after').strip()}"
    return ServingParse(_to_quantity(q.group("qty")), unit, food)

def _match_leading_quantity(name: str, cfg: ParserConfig) -> Optional[ServingParse]:
    m = LEADING_QTY_PAT.match(name)
    if not m:
        return None
    rest = m.group("rest").strip()
    w = FIRST_WORD_PAT.match(rest)
    if w and w.group("rest") and _is_unit(w.group("word"), cfg):
        return ServingParse(_to_quantity(m.group("qty")), _norm_unit(w.group("word")), w.group("rest").strip())
    if w and not w.group("rest") and _is_unit(w.group("word"), cfg):
        return None
    return ServingParse(_to_quantity(m.group("qty")), "un", rest)

def _match_fallback(name: str, cfg: ParserConfig) -> Optional[ServingParse]:
    return ServingParse(1.0, "un", name.strip())

# ordem importa: padrões mais estritos primeiro
NAME_MATCHERS: List[Callable[[str, ParserConfig], Optional[ServingParse]]] = [
    _match_possessive,
    _match_parenthetical,
    _match_leading_quantity,
    _match_fallback,
]

def parse_serving(name: str, config: Optional[ParserConfig] = None) -> ServingParse:
    cfg = config or DEFAULT_CONFIG
    name = " ".join(name.split())
    for matcher in NAME_MATCHERS:
        found = matcher(name, cfg)
        if found is not None and found.food:
            return found
    return ServingParse(1.0, "un", name)

def parse_meal_line(line: str, config: Optional[ParserConfig] = None) -> Optional[MealTemplateCandidate]:
    cfg = config or DEFAULT_CONFIG
    body, _ = strip_bullet(line or "", cfg)
    m = MEAL_LINE_PAT.match(body)
    if not m:
        return None
    serving = parse_serving(m.group("name"), cfg)
    return MealTemplateCandidate(
        original_name=serving.food,
        normalized_name=normalize_name(serving.food, cfg),
        serving_size=serving.quantity,
        serving_unit=serving.unit,
        calories=_to_float(m.group("calories")),
        protein=_to_float(m.group("protein")),
        carbs=_to_float(m.group("carbs")),
        fat=_to_float(m.group("fat")),
    )

def extract_meal_lines(text: str, config: Optional[ParserConfig] = None) -> List[str]:
    cfg = config or DEFAULT_CONFIG
    lines = [l.strip() for l in (text or "").splitlines() if l.strip()]
    if cfg.require_bullet:
        lines = [l for l in lines if strip_bullet(l, cfg)[1]]
    return lines

def parse_nutrition_text(text: str, config: Optional[ParserConfig] = None) -> List[MealTemplateCandidate]:
    """Parse a pasted diet plan into aggregated meal-template candidates.

    Lines that do not have the ``name: kcal | protein | carbs | fat`` shape
    are skipped. Repeated items (same normalized name and unit) are summed
    into the first occurrence.
    """
    cfg = config or DEFAULT_CONFIG
    items = []
    for ln in extract_meal_lines(text, cfg):
        cand = parse_meal_line(ln, cfg)
        if cand is None:
            log.debug("Skipping unrecognized meal line: %r", ln)
            continue
        items.append(cand)
    return aggregate_candidates(items)
