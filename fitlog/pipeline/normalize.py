from __future__ import annotations
import re, unicodedata
from typing import Optional
from ..config import ParserConfig, DEFAULT_CONFIG

WS_PAT = re.compile(r"\s+")

def fold_accents(word: str) -> str:
    decomposed = unicodedata.normalize("NFD", word)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))

def singularize(word: str, config: Optional[ParserConfig] = None) -> str:
    """Heuristic de-pluralization of a single lowercase word.

    Not a stemmer: irregular plurals missing from the config map are left
    as false negatives.
    """
    cfg = config or DEFAULT_CONFIG
    folded = fold_accents(word)
    if any(folded == fold_accents(exc) for exc in cfg.plural_exceptions):
        return word
    if word in cfg.irregular_plurals:
        return cfg.irregular_plurals[word]
    if len(word) > 3 and word.endswith("s"):
        return word[:-1]
    return word

def normalize_name(raw: str, config: Optional[ParserConfig] = None) -> str:
    """Template dedup key: lowercase, collapsed whitespace, singular words."""
    text = WS_PAT.sub(" ", (raw or "").lower()).strip()
    if not text:
        return ""
    return " ".join(singularize(w, config) for w in text.split(" "))
