"""Plant encyclopedia operations backed by Gemini.

Every operation builds a request, submits it and parses the answer. Failures of
any kind are logged and reported as an empty result; nothing is raised to the
caller.
"""
import logging
from typing import List, Optional, Tuple

from backend.models import DiagnosisResult, PlantData, SearchResult
from backend.services import gemini_client, prompts
from backend.services.parts import ImagePart, PlantRequestError
from backend.services.response_parser import parse

logger = logging.getLogger(__name__)

DEFAULT_PLANTS: Tuple[SearchResult, ...] = (
    SearchResult("龟背竹", "Monstera deliciosa", "热带风情，叶片独特，适合室内散射光环境，非常受欢迎的网红植物。"),
    SearchResult("虎尾兰", "Sansevieria trifasciata", "极强的空气净化能力，耐阴耐旱，非常适合懒人养护。"),
    SearchResult("琴叶榕", "Ficus lyrata", "叶片如提琴般优美，植株高大挺拔，是提升家居格调的利器。"),
    SearchResult("绿萝", "Epipremnum aureum", "生命力顽强，遇水即活，是新手入门的最佳选择。"),
)


def search_plants(query: str, *, api_key: str, model: str = gemini_client.DEFAULT_MODEL) -> List[SearchResult]:
    try:
        request = prompts.build_search_request(query)
    except PlantRequestError as exc:
        logger.warning("Search skipped: %s", exc)
        return []
    raw = gemini_client.submit(request, api_key=api_key, model=model)
    results = parse(raw, request.schema, into=lambda items: [SearchResult.from_dict(item) for item in items])
    if results is None:
        logger.error("Search failed for query %r", query)
        return []
    return results


def get_plant_details(plant_name: str, *, api_key: str, model: str = gemini_client.DEFAULT_MODEL) -> Optional[PlantData]:
    try:
        request = prompts.build_detail_request(plant_name)
    except PlantRequestError as exc:
        logger.warning("Detail lookup skipped: %s", exc)
        return None
    raw = gemini_client.submit(request, api_key=api_key, model=model)
    data = parse(raw, request.schema, into=PlantData.from_dict)
    if data is None:
        logger.error("Get details failed for %r", plant_name)
    return data


def diagnose_plant_issue(
    description: Optional[str],
    image: Optional[ImagePart] = None,
    *,
    api_key: str,
    model: str = gemini_client.DEFAULT_MODEL,
) -> Optional[DiagnosisResult]:
    try:
        request = prompts.build_diagnosis_request(description, image)
    except PlantRequestError as exc:
        logger.warning("Diagnosis skipped: %s", exc)
        return None
    raw = gemini_client.submit(request, api_key=api_key, model=model)
    result = parse(raw, request.schema, into=DiagnosisResult.from_dict)
    if result is None:
        logger.error("Diagnosis failed")
    return result


def identify_plant(image: Optional[ImagePart], *, api_key: str, model: str = gemini_client.DEFAULT_MODEL) -> Optional[SearchResult]:
    try:
        request = prompts.build_identify_request(image)
    except PlantRequestError as exc:
        logger.warning("Identification skipped: %s", exc)
        return None
    raw = gemini_client.submit(request, api_key=api_key, model=model)
    result = parse(raw, request.schema, into=SearchResult.from_dict)
    if result is None:
        logger.error("Identification failed")
    return result
