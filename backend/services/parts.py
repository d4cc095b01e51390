import base64
import binascii
import mimetypes
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}


class PlantRequestError(ValueError):
    """Raised when a model request cannot be built from the given input."""


@dataclass(frozen=True)
class TextPart:
    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise PlantRequestError("Text part must not be empty")

    def to_payload(self) -> Dict[str, Any]:
        return {"text": self.text}


@dataclass(frozen=True)
class ImagePart:
    """An inline image, stored as base64 exactly as it is sent to the model."""

    mime_type: str
    data: str

    def __post_init__(self) -> None:
        if not (self.mime_type or "").startswith("image/"):
            raise PlantRequestError(f"Unsupported image type: {self.mime_type or 'unknown'}")
        if not self.data:
            raise PlantRequestError("Image payload is empty")
        try:
            base64.b64decode(self.data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise PlantRequestError("Image payload is not valid base64") from exc

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str = "image/jpeg") -> "ImagePart":
        if not raw:
            raise PlantRequestError("Image payload is empty")
        return cls(mime_type=mime_type, data=base64.b64encode(raw).decode("utf-8"))

    @classmethod
    def from_upload(cls, storage: Any) -> Optional["ImagePart"]:
        """Build a part from a werkzeug ``FileStorage``; None when nothing was picked."""
        if storage is None or not getattr(storage, "filename", None):
            return None
        filename = storage.filename
        ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else 'jpg'
        if ext not in ALLOWED_IMAGE_EXTENSIONS:
            raise PlantRequestError("Unsupported file type")
        mime = storage.mimetype if (storage.mimetype or "").startswith("image/") else None
        mime = mime or mimetypes.guess_type(filename)[0] or 'image/jpeg'
        return cls.from_bytes(storage.read(), mime)

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    def to_payload(self) -> Dict[str, Any]:
        return {"inline_data": {"mime_type": self.mime_type, "data": self.data}}


Part = Union[TextPart, ImagePart]
