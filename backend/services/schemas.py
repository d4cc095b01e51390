"""Output shape descriptors for the Gemini ``responseSchema`` field.

The same descriptor is sent along with the prompt and used afterwards to check
the JSON the model returned.
"""
from typing import Any, Dict, Optional, Sequence

STRING = "STRING"
OBJECT = "OBJECT"
ARRAY = "ARRAY"

DIFFICULTIES = ("Easy", "Medium", "Hard")

CARE_FIELDS = ("light", "water", "soil", "temperature", "humidity", "fertilizer")


def string(description: Optional[str] = None, *, enum: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": STRING}
    if description:
        schema["description"] = description
    if enum:
        schema["enum"] = list(enum)
    return schema


def array(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": ARRAY, "items": items}


def obj(properties: Dict[str, Dict[str, Any]], required: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": OBJECT, "properties": dict(properties)}
    if required:
        schema["required"] = list(required)
    return schema


def conforms(value: Any, schema: Dict[str, Any]) -> bool:
    """Return True when ``value`` matches ``schema``.

    Required properties must be present and not null; required strings must
    also be non-blank. Properties the schema does not list are ignored.
    """
    kind = schema.get("type")
    if kind == STRING:
        if not isinstance(value, str):
            return False
        allowed = schema.get("enum")
        return not allowed or value in allowed
    if kind == ARRAY:
        if not isinstance(value, list):
            return False
        items = schema.get("items") or {}
        return all(conforms(item, items) for item in value)
    if kind == OBJECT:
        if not isinstance(value, dict):
            return False
        properties = schema.get("properties") or {}
        for key in schema.get("required") or []:
            field = value.get(key)
            if field is None:
                return False
            if isinstance(field, str) and not field.strip():
                return False
        for key, sub_schema in properties.items():
            if key in value and value[key] is not None and not conforms(value[key], sub_schema):
                return False
        return True
    return False


_SEARCH_RESULT_PROPERTIES = {
    "name": string("Common name in Chinese (if query is Chinese) or English"),
    "scientificName": string(),
    "shortDescription": string("One sentence summary"),
}

SEARCH_RESULTS_SCHEMA = array(
    obj(_SEARCH_RESULT_PROPERTIES, required=["name", "scientificName", "shortDescription"])
)

IDENTIFY_SCHEMA = obj(
    {
        "name": string("Common name in Chinese"),
        "scientificName": string(),
        "shortDescription": string("One sentence summary"),
    },
    required=["name", "scientificName", "shortDescription"],
)

PLANT_CARE_SCHEMA = obj(
    {
        "light": string("Detailed light requirements"),
        "water": string("Watering frequency and method"),
        "soil": string("Soil type preferences"),
        "temperature": string("Ideal temp range"),
        "humidity": string("Humidity requirements"),
        "fertilizer": string("Feeding guide"),
    },
    required=list(CARE_FIELDS),
)

PLANT_DATA_SCHEMA = obj(
    {
        "name": string(),
        "scientificName": string(),
        "description": string("2-3 paragraphs about the plant history and appearance"),
        "difficulty": string(enum=DIFFICULTIES),
        "care": PLANT_CARE_SCHEMA,
        "tags": array(string()),
    },
    required=["name", "scientificName", "description", "care", "difficulty", "tags"],
)

DIAGNOSIS_SCHEMA = obj(
    {
        "diagnosis": string("Name of the disease or issue"),
        "solution": string("Step by step fix"),
        "prevention": string("How to prevent in future"),
    },
    required=["diagnosis", "solution", "prevention"],
)
