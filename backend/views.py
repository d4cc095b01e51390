"""Screen states and navigation.

The app is always on exactly one screen. Each screen is an immutable state
holding its own loading flag and result slot, and ``reduce`` is the only way to
move between screens. Leaving a screen drops whatever it had fetched.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from backend.models import DiagnosisResult, PlantData, SearchResult
from backend.services.parts import ImagePart
from backend.services.plant_ai import DEFAULT_PLANTS
from backend.services.prompts import can_diagnose, can_identify


class View(str, Enum):
    HOME = "HOME"
    # Declared for parity with the screen list, no action leads here.
    SEARCH = "SEARCH"
    DETAIL = "DETAIL"
    DOCTOR = "DOCTOR"
    IDENTIFY = "IDENTIFY"


# --- Screens -------------------------------------------------------------

@dataclass(frozen=True)
class HomeScreen:
    query: str = ""
    plants: Tuple[SearchResult, ...] = DEFAULT_PLANTS
    is_searching: bool = False

    view = View.HOME

    @property
    def has_query(self) -> bool:
        return bool(self.query.strip())


@dataclass(frozen=True)
class DetailScreen:
    plant_name: str
    data: Optional[PlantData] = None
    loading: bool = True

    view = View.DETAIL


@dataclass(frozen=True)
class DoctorScreen:
    description: str = ""
    image: Optional[ImagePart] = None
    loading: bool = False
    result: Optional[DiagnosisResult] = None

    view = View.DOCTOR

    @property
    def can_submit(self) -> bool:
        return not self.loading and can_diagnose(self.description, self.image)


@dataclass(frozen=True)
class IdentifyScreen:
    image: Optional[ImagePart] = None
    loading: bool = False
    result: Optional[SearchResult] = None

    view = View.IDENTIFY

    @property
    def can_submit(self) -> bool:
        return not self.loading and can_identify(self.image)


Screen = Union[HomeScreen, DetailScreen, DoctorScreen, IdentifyScreen]


# --- Actions -------------------------------------------------------------

@dataclass(frozen=True)
class GoHome:
    pass


@dataclass(frozen=True)
class OpenDoctor:
    pass


@dataclass(frozen=True)
class OpenIdentify:
    pass


@dataclass(frozen=True)
class SelectPlant:
    name: str


@dataclass(frozen=True)
class PlantFound:
    name: str


@dataclass(frozen=True)
class SubmitSearch:
    query: str


@dataclass(frozen=True)
class ClearSearch:
    pass


@dataclass(frozen=True)
class SearchFinished:
    plants: Tuple[SearchResult, ...]


@dataclass(frozen=True)
class DetailLoaded:
    data: Optional[PlantData]


@dataclass(frozen=True)
class DescribeSymptoms:
    text: str


@dataclass(frozen=True)
class AttachImage:
    image: Optional[ImagePart]


@dataclass(frozen=True)
class StartDiagnosis:
    pass


@dataclass(frozen=True)
class DiagnosisFinished:
    result: Optional[DiagnosisResult]


@dataclass(frozen=True)
class StartIdentification:
    pass


@dataclass(frozen=True)
class IdentificationFinished:
    result: Optional[SearchResult]


Action = Union[
    GoHome, OpenDoctor, OpenIdentify, SelectPlant, PlantFound,
    SubmitSearch, ClearSearch, SearchFinished, DetailLoaded,
    DescribeSymptoms, AttachImage, StartDiagnosis, DiagnosisFinished,
    StartIdentification, IdentificationFinished,
]


def initial_screen() -> Screen:
    return HomeScreen()


def reduce(screen: Screen, action: Action) -> Screen:
    """Return the screen that results from applying ``action`` to ``screen``.

    Actions that make no sense on the current screen return it unchanged.
    """
    if isinstance(action, GoHome):
        if isinstance(screen, HomeScreen):
            return screen
        return HomeScreen()

    if isinstance(screen, HomeScreen):
        return _reduce_home(screen, action)
    if isinstance(screen, DetailScreen):
        if isinstance(action, DetailLoaded):
            return replace(screen, data=action.data, loading=False)
        return screen
    if isinstance(screen, DoctorScreen):
        return _reduce_doctor(screen, action)
    if isinstance(screen, IdentifyScreen):
        return _reduce_identify(screen, action)
    return screen


def _reduce_home(screen: HomeScreen, action: Action) -> Screen:
    if isinstance(action, SelectPlant) and action.name.strip():
        return DetailScreen(plant_name=action.name.strip())
    if isinstance(action, OpenDoctor):
        return DoctorScreen()
    if isinstance(action, OpenIdentify):
        return IdentifyScreen()
    if isinstance(action, SubmitSearch):
        if not action.query.strip():
            return HomeScreen()
        return replace(screen, query=action.query, is_searching=True)
    if isinstance(action, ClearSearch):
        return HomeScreen()
    if isinstance(action, SearchFinished) and screen.is_searching:
        return replace(screen, plants=tuple(action.plants), is_searching=False)
    return screen


def _reduce_doctor(screen: DoctorScreen, action: Action) -> Screen:
    if isinstance(action, DescribeSymptoms):
        return replace(screen, description=action.text or "")
    if isinstance(action, AttachImage):
        return replace(screen, image=action.image)
    if isinstance(action, StartDiagnosis):
        if not screen.can_submit:
            return screen
        return replace(screen, loading=True, result=None)
    if isinstance(action, DiagnosisFinished) and screen.loading:
        return replace(screen, loading=False, result=action.result)
    return screen


def _reduce_identify(screen: IdentifyScreen, action: Action) -> Screen:
    if isinstance(action, AttachImage):
        return replace(screen, image=action.image, result=None)
    if isinstance(action, StartIdentification):
        if not screen.can_submit:
            return screen
        return replace(screen, loading=True, result=None)
    if isinstance(action, IdentificationFinished) and screen.loading:
        result = action.result
        if result is not None and screen.image is not None:
            # Show the user's own photo on the result card
            result = result.with_image(screen.image.data_url)
        return replace(screen, loading=False, result=result)
    if isinstance(action, PlantFound) and action.name.strip():
        return DetailScreen(plant_name=action.name.strip())
    return screen
