import json
import logging
from typing import Any, Callable, Dict, Optional

from backend.services.schemas import conforms

logger = logging.getLogger(__name__)


def parse(raw: Optional[str], schema: Dict[str, Any], into: Optional[Callable[[Any], Any]] = None) -> Any:
    """Decode ``raw`` as JSON and check it against ``schema``.

    Anything that is not JSON, or JSON that does not match the schema, yields
    None. There is no attempt to salvage part of an answer.
    """
    if not raw:
        return None
    try:
        value = json.loads(raw.strip())
    except json.JSONDecodeError as exc:
        logger.warning("Model answer is not valid JSON: %s", exc)
        return None
    if not conforms(value, schema):
        logger.warning("Model answer does not match the expected %s shape", schema.get("type"))
        return None
    if into is None:
        return value
    try:
        return into(value)
    except (KeyError, TypeError, AttributeError) as exc:
        logger.warning("Model answer could not be converted: %s", exc)
        return None
