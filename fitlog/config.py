from __future__ import annotations
import os, logging
from typing import Dict, List
from pydantic import BaseModel, Field

log = logging.getLogger(__name__)

# Palavras terminadas em "s" que já estão no singular
PLURAL_EXCEPTIONS = ["arroz", "lápis", "pires", "ônibus"]

IRREGULAR_PLURALS = {"colheres": "colher"}

UNIT_KEYWORDS = [
    "g", "gr", "grama", "kg", "mg", "ml", "l", "litro",
    "un", "unidade", "xícara", "xicara", "colher", "colher_sopa", "colher_cha", "col",
    "fatia", "scoop", "copo", "pote", "concha", "porção", "porcao",
    "pedaço", "pedaco", "lata", "dente", "sache", "sachê", "pitada", "pacote",
]


class ParserConfig(BaseModel):
    bullet_markers: List[str] = Field(default_factory=lambda: ["-", "•", "*"])
    require_bullet: bool = False
    plural_exceptions: List[str] = Field(default_factory=lambda: list(PLURAL_EXCEPTIONS))
    irregular_plurals: Dict[str, str] = Field(default_factory=lambda: dict(IRREGULAR_PLURALS))
    unit_keywords: List[str] = Field(default_factory=lambda: list(UNIT_KEYWORDS))
    # tolerância relativa de densidade calórica (kcal por unidade de porção)
    density_tolerance: float = Field(0.10, ge=0.0)
    # mais números que isso dentro dos parênteses => receita composta
    recipe_number_threshold: int = Field(1, ge=1)


DEFAULT_CONFIG = ParserConfig()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        log.warning("Invalid %s=%r, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("Invalid %s=%r, using %s", name, raw, default)
        return default


def load_config() -> ParserConfig:
    """Build a ParserConfig from FITLOG_* environment variables."""
    extra = [w.strip().lower() for w in os.getenv("FITLOG_PLURAL_EXCEPTIONS", "").split(",") if w.strip()]
    tolerance = _env_float("FITLOG_DENSITY_TOLERANCE", 0.10)
    if tolerance < 0:
        log.warning("Negative FITLOG_DENSITY_TOLERANCE=%s, using 0.10", tolerance)
        tolerance = 0.10
    threshold = _env_int("FITLOG_RECIPE_NUMBER_THRESHOLD", 1)
    if threshold < 1:
        log.warning("FITLOG_RECIPE_NUMBER_THRESHOLD must be >= 1, using 1")
        threshold = 1
    return ParserConfig(
        require_bullet=os.getenv("FITLOG_REQUIRE_BULLET", "").strip().lower() in {"1", "true", "yes", "sim"},
        plural_exceptions=PLURAL_EXCEPTIONS + [w for w in extra if w not in PLURAL_EXCEPTIONS],
        density_tolerance=tolerance,
        recipe_number_threshold=threshold,
    )
