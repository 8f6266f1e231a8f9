import json, os, re, logging
from pathlib import Path
from typing import Dict, Any, List, Type, TypeVar
from pydantic import BaseModel, ValidationError
from .models import MealTemplate, ExerciseTemplate

T = TypeVar("T", bound=BaseModel)

log = logging.getLogger(__name__)

DATA_DIR = Path(os.getenv("FITLOG_DATA_DIR", Path(__file__).resolve().parents[1] / "data"))
SAFE_ID = re.compile(r"[^A-Za-z0-9_.-]")

def ensure_dirs():
    DATA_DIR.mkdir(parents=True, exist_ok=True)

def _user_path(user_id: str) -> Path:
    return DATA_DIR / f"templates_{SAFE_ID.sub('_', user_id)}.json"

def _read(user_id: str) -> Dict[str, Any]:
    path = _user_path(user_id)
    if not path.exists():
        return {"meals": [], "exercises": []}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Unreadable template store %s (%s), starting empty", path, e)
        return {"meals": [], "exercises": []}
    if not isinstance(data, dict):
        log.warning("Template store %s is not a JSON object, starting empty", path)
        return {"meals": [], "exercises": []}
    for key in ("meals", "exercises"):
        if not isinstance(data.get(key), list):
            data[key] = []
    return data

def _write(user_id: str, data: Dict[str, Any]):
    ensure_dirs()
    _user_path(user_id).write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

def _load_entries(user_id: str, key: str, model: Type[T]) -> List[T]:
    out = []
    for raw in _read(user_id)[key]:
        try:
            out.append(model.model_validate(raw))
        except ValidationError as e:
            log.warning("Skipping invalid %s entry for %s: %s", key, user_id, e.errors()[:1])
    return out

def list_meal_templates(user_id: str) -> List[MealTemplate]:
    return _load_entries(user_id, "meals", MealTemplate)

def list_exercise_templates(user_id: str) -> List[ExerciseTemplate]:
    return _load_entries(user_id, "exercises", ExerciseTemplate)

def save_meal_templates(user_id: str, templates: List[MealTemplate]):
    data = _read(user_id)
    data["meals"] = [t.model_dump() for t in templates]
    _write(user_id, data)

def save_exercise_templates(user_id: str, templates: List[ExerciseTemplate]):
    data = _read(user_id)
    data["exercises"] = [t.model_dump() for t in templates]
    _write(user_id, data)

def add_meal_template(user_id: str, template: MealTemplate):
    save_meal_templates(user_id, list_meal_templates(user_id) + [template])

def delete_meal_template(user_id: str, template_id: str) -> bool:
    templates = list_meal_templates(user_id)
    kept = [t for t in templates if t.id != template_id]
    if len(kept) == len(templates):
        return False
    save_meal_templates(user_id, kept)
    return True
