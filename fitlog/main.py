from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from typing import List
import uvicorn
from .models import (
    ParseRequest, NutritionParseResponse, WorkoutParseResponse, MealTemplateCandidate,
    ExerciseTemplateCandidate, MealTemplate, ExerciseTemplate, MealEntry, LogMealResponse,
    MealMergeResult, ExerciseMergeResult,
)
from .config import load_config
from . import storage
from .pipeline.parse import to_plain_text
from .pipeline.extract import parse_nutrition_text
from .pipeline.workout import parse_workout_text
from .pipeline.reconcile import (
    find_or_create_template, template_from_entry, merge_meal_templates, merge_exercise_templates,
)
import os, logging

logging.basicConfig(level=os.getenv("FITLOG_LOG_LEVEL", "INFO").upper())
log = logging.getLogger(__name__)

NO_ITEMS_MESSAGE = "No valid items found, check the line format"

app = FastAPI(title="Fitlog Plan Parser", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Altere para os domínios permitidos
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

config = load_config()
storage.ensure_dirs()

@app.post("/v1/parse/nutrition", response_model=NutritionParseResponse)
def parse_nutrition(req: ParseRequest):
    items = parse_nutrition_text(to_plain_text(req.input_type, req.content), config)
    return NutritionParseResponse(items=items, message=None if items else NO_ITEMS_MESSAGE)

@app.post("/v1/parse/workout", response_model=WorkoutParseResponse)
def parse_workout(req: ParseRequest):
    items = parse_workout_text(to_plain_text(req.input_type, req.content), config)
    return WorkoutParseResponse(items=items, message=None if items else NO_ITEMS_MESSAGE)

@app.get("/v1/users/{user_id}/templates/meals", response_model=List[MealTemplate])
def list_meal_templates(user_id: str):
    return storage.list_meal_templates(user_id)

@app.get("/v1/users/{user_id}/templates/exercises", response_model=List[ExerciseTemplate])
def list_exercise_templates(user_id: str):
    return storage.list_exercise_templates(user_id)

@app.post("/v1/users/{user_id}/templates/meals/import", response_model=MealMergeResult)
def import_meal_templates(user_id: str, items: List[MealTemplateCandidate]):
    result = merge_meal_templates(items, storage.list_meal_templates(user_id), config)
    if result.added:
        storage.save_meal_templates(user_id, result.templates)
    log.info("User %s: %d meal templates added, %d skipped", user_id, len(result.added), len(result.skipped))
    return result

@app.post("/v1/users/{user_id}/templates/exercises/import", response_model=ExerciseMergeResult)
def import_exercise_templates(user_id: str, items: List[ExerciseTemplateCandidate]):
    result = merge_exercise_templates(items, storage.list_exercise_templates(user_id), config)
    if result.added:
        storage.save_exercise_templates(user_id, result.templates)
    log.info("User %s: %d exercise templates added, %d skipped", user_id, len(result.added), len(result.skipped))
    return result

@app.post("/v1/users/{user_id}/meals", response_model=LogMealResponse)
def log_meal(user_id: str, entry: MealEntry):
    decision = find_or_create_template(entry, storage.list_meal_templates(user_id), config)
    if decision.reuse is not None:
        return LogMealResponse(template=decision.reuse, created=False)
    template = template_from_entry(entry, config)
    storage.add_meal_template(user_id, template)
    return LogMealResponse(template=template, created=True)

@app.delete("/v1/users/{user_id}/templates/meals/{template_id}", status_code=204)
def delete_meal_template(user_id: str, template_id: str):
    if not storage.delete_meal_template(user_id, template_id):
        raise HTTPException(404, "Template not found")
    return Response(status_code=204)

def run():
    uvicorn.run(app, host=os.getenv("FITLOG_HOST", "127.0.0.1"), port=int(os.getenv("FITLOG_PORT", "8000")))

if __name__ == "__main__":
    run()
