from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal, List

class MealTemplateCandidate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    original_name: str
    normalized_name: str
    serving_size: float = 1.0
    serving_unit: str = "un"
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)

class ExerciseTemplateCandidate(BaseModel):
    name: str
    sets: int = Field(0, ge=0)
    reps: int = Field(0, ge=0)
    notes: str = ""  # especificação original das repetições, ex.: "Reps: 6-10"
    technique: str = ""

class MealTemplate(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: str
    name: str
    normalized_name: Optional[str] = None  # calculado a partir de name quando ausente
    serving_size: float = 1.0
    serving_unit: str = "un"
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)

class ExerciseTemplate(BaseModel):
    id: str
    name: str
    normalized_name: Optional[str] = None
    sets: int = 0
    reps: int = 0
    technique: str = ""
    notes: str = ""

class MealEntry(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., min_length=1)
    quantity: float  # não positiva cai na regra de reaproveitamento do conciliador
    unit: str = "un"
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)

class ReconcileResult(BaseModel):
    reuse: Optional[MealTemplate] = None
    create_new: bool = False

class MealMergeResult(BaseModel):
    templates: List[MealTemplate] = []
    added: List[MealTemplate] = []
    skipped: List[str] = []  # nomes já presentes no acervo ou repetidos no lote

class ExerciseMergeResult(BaseModel):
    templates: List[ExerciseTemplate] = []
    added: List[ExerciseTemplate] = []
    skipped: List[str] = []

class ParseRequest(BaseModel):
    input_type: Literal["auto", "text", "html"] = "auto"
    content: str = Field(..., description="Texto colado pelo usuário (plano alimentar ou de treino)")

class NutritionParseResponse(BaseModel):
    items: List[MealTemplateCandidate] = []
    message: Optional[str] = None

class WorkoutParseResponse(BaseModel):
    items: List[ExerciseTemplateCandidate] = []
    message: Optional[str] = None

class LogMealResponse(BaseModel):
    template: MealTemplate
    created: bool
