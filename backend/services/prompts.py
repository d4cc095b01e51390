"""Prompt builders, one per intent.

Each builder returns a :class:`PlantRequest` holding the ordered request parts
and the schema the answer has to follow. Only presence checks happen here.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from backend.services import schemas
from backend.services.parts import ImagePart, Part, PlantRequestError, TextPart


class Intent(str, Enum):
    SEARCH = "search"
    DETAIL = "detail"
    DIAGNOSE = "diagnose"
    IDENTIFY = "identify"


@dataclass(frozen=True)
class PlantRequest:
    intent: Intent
    parts: Tuple[Part, ...]
    schema: Dict[str, Any]


def can_diagnose(description: Optional[str], image: Optional[ImagePart]) -> bool:
    return bool((description or "").strip()) or image is not None


def can_identify(image: Optional[ImagePart]) -> bool:
    return image is not None


def build_search_request(query: str) -> PlantRequest:
    normalized = (query or "").strip()
    if not normalized:
        raise PlantRequestError("Search query is required")
    prompt = f'Find 5 indoor plants matching the query: "{normalized}". Return a JSON array.'
    return PlantRequest(Intent.SEARCH, (TextPart(prompt),), schemas.SEARCH_RESULTS_SCHEMA)


def build_detail_request(plant_name: str) -> PlantRequest:
    normalized = (plant_name or "").strip()
    if not normalized:
        raise PlantRequestError("Plant name is required")
    prompt = f'Provide detailed encyclopedia data for the indoor plant: "{normalized}". Return in Chinese.'
    return PlantRequest(Intent.DETAIL, (TextPart(prompt),), schemas.PLANT_DATA_SCHEMA)


def build_diagnosis_request(description: Optional[str], image: Optional[ImagePart] = None) -> PlantRequest:
    if not can_diagnose(description, image):
        raise PlantRequestError("A symptom description or a photo is required")
    normalized = (description or "").strip()
    prompt = (
        "You are an expert botanist. Diagnose the plant issue based on this description"
        f"{' and image' if image is not None else ''}: \"{normalized}\". "
        "Provide the output in Chinese JSON format."
    )
    parts: Tuple[Part, ...] = (TextPart(prompt),)
    if image is not None:
        parts = (image,) + parts
    return PlantRequest(Intent.DIAGNOSE, parts, schemas.DIAGNOSIS_SCHEMA)


def build_identify_request(image: Optional[ImagePart]) -> PlantRequest:
    if not can_identify(image):
        raise PlantRequestError("A photo is required for identification")
    prompt = (
        "Identify this plant. Provide the common name (in Chinese), scientific name, "
        "and a short one-sentence description in Chinese. Return in JSON."
    )
    return PlantRequest(Intent.IDENTIFY, (image, TextPart(prompt)), schemas.IDENTIFY_SCHEMA)
