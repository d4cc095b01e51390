from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SearchResult:
    name: str
    scientific_name: str
    short_description: str
    image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        return cls(
            name=data["name"].strip(),
            scientific_name=data["scientificName"].strip(),
            short_description=data["shortDescription"].strip(),
            image_url=_clean_optional(data.get("imageUrl")),
        )

    def with_image(self, image_url: Optional[str]) -> "SearchResult":
        return replace(self, image_url=image_url)


@dataclass(frozen=True)
class PlantCare:
    light: str
    water: str
    soil: str
    temperature: str
    humidity: str
    fertilizer: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlantCare":
        return cls(
            light=data["light"],
            water=data["water"],
            soil=data["soil"],
            temperature=data["temperature"],
            humidity=data["humidity"],
            fertilizer=data["fertilizer"],
        )


@dataclass(frozen=True)
class PlantData:
    name: str
    scientific_name: str
    description: str
    difficulty: str
    care: PlantCare
    tags: List[str] = field(default_factory=list)
    image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlantData":
        return cls(
            name=data["name"].strip(),
            scientific_name=data["scientificName"].strip(),
            description=data["description"].strip(),
            difficulty=data["difficulty"],
            care=PlantCare.from_dict(data["care"]),
            tags=[tag.strip() for tag in data["tags"] if tag and tag.strip()],
            image_url=_clean_optional(data.get("imageUrl")),
        )


@dataclass(frozen=True)
class DiagnosisResult:
    diagnosis: str
    solution: str
    prevention: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DiagnosisResult":
        return cls(
            diagnosis=data["diagnosis"].strip(),
            solution=data["solution"].strip(),
            prevention=data["prevention"].strip(),
        )


def _clean_optional(value: Any) -> Optional[str]:
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    return None
