# klara/model/ai_model.py

from typing import List, Literal, Optional
from pydantic import BaseModel


class AIModel(BaseModel):
    """Static catalog entry used to parameterize chat requests"""
    id: str
    name: str
    provider: Literal["openai", "gemini"]
    free: bool

    model_config = {
        "frozen": True,
    }


AI_MODELS: List[AIModel] = [
    # OpenAI
    AIModel(id="gpt-3.5-turbo", name="GPT-3.5 Turbo", provider="openai", free=True),
    AIModel(id="gpt-4", name="GPT-4", provider="openai", free=False),
    AIModel(id="gpt-4-turbo", name="GPT-4 Turbo", provider="openai", free=False),
    AIModel(id="gpt-4o", name="GPT-4o", provider="openai", free=False),
    AIModel(id="gpt-4o-mini", name="GPT-4o Mini", provider="openai", free=True),
    # Gemini
    AIModel(id="gemini-1.5-flash", name="Gemini 1.5 Flash", provider="gemini", free=True),
    AIModel(id="gemini-1.5-pro", name="Gemini 1.5 Pro", provider="gemini", free=False),
    AIModel(id="gemini-2.0-flash", name="Gemini 2.0 Flash", provider="gemini", free=True),
]


def find_model(model_id: str) -> Optional[AIModel]:
    for model in AI_MODELS:
        if model.id == model_id:
            return model
    return None
