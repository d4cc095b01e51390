import logging

from flask import Blueprint, current_app, flash, redirect, request, url_for

from backend import components
from backend.services import plant_ai
from backend.services.gemini_client import DEFAULT_MODEL
from backend.services.parts import ImagePart, PlantRequestError
from backend.views import (
    AttachImage,
    ClearSearch,
    DescribeSymptoms,
    DetailLoaded,
    DetailScreen,
    DiagnosisFinished,
    DoctorScreen,
    GoHome,
    IdentificationFinished,
    IdentifyScreen,
    OpenDoctor,
    OpenIdentify,
    PlantFound,
    SearchFinished,
    SelectPlant,
    StartDiagnosis,
    StartIdentification,
    SubmitSearch,
    initial_screen,
    reduce,
)

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__)

# Utility functions

def _gemini_settings():
    return {
        'api_key': current_app.config.get('GEMINI_API_KEY') or '',
        'model': current_app.config.get('GEMINI_MODEL') or DEFAULT_MODEL,
    }

def url_for_screen(screen):
    if isinstance(screen, DetailScreen):
        return url_for('api.plant_detail', plant_name=screen.plant_name)
    if isinstance(screen, DoctorScreen):
        return url_for('api.doctor')
    if isinstance(screen, IdentifyScreen):
        return url_for('api.identify')
    return url_for('api.index')

def _back_url(screen):
    return url_for_screen(reduce(screen, GoHome()))

def _image_from_form():
    """Use a newly picked file, else the photo carried over from the last submit."""
    try:
        image = ImagePart.from_upload(request.files.get('image'))
        if image is None and request.form.get('image_data'):
            image = ImagePart(
                mime_type=request.form.get('image_mime') or 'image/jpeg',
                data=request.form['image_data'],
            )
        return image
    except PlantRequestError as e:
        logger.warning("Ignoring uploaded image: %s", e)
        flash('请上传 PNG、JPG、GIF 或 WEBP 格式的图片。')
        return None

@api_bp.route('/')
def index():
    screen = initial_screen()
    if 'q' in request.args:
        screen = reduce(screen, SubmitSearch(request.args.get('q', '')))
    if screen.is_searching:
        results = plant_ai.search_plants(screen.query, **_gemini_settings())
        screen = reduce(screen, SearchFinished(tuple(results)))

    def select_url(name):
        return url_for_screen(reduce(screen, SelectPlant(name)))

    return components.render_screen(
        screen,
        select_url=select_url,
        clear_url=url_for_screen(reduce(screen, ClearSearch())),
        doctor_url=url_for_screen(reduce(screen, OpenDoctor())),
        identify_url=url_for_screen(reduce(screen, OpenIdentify())),
    )

@api_bp.route('/plants/<path:plant_name>')
def plant_detail(plant_name):
    screen = reduce(initial_screen(), SelectPlant(plant_name))
    if not isinstance(screen, DetailScreen):
        return redirect(url_for('api.index'))
    data = plant_ai.get_plant_details(screen.plant_name, **_gemini_settings())
    screen = reduce(screen, DetailLoaded(data))
    return components.render_screen(screen, back_url=_back_url(screen))

@api_bp.route('/doctor', methods=['GET', 'POST'])
def doctor():
    screen = reduce(initial_screen(), OpenDoctor())
    attempted = False
    if request.method == 'POST':
        screen = reduce(screen, DescribeSymptoms(request.form.get('description', '')))
        screen = reduce(screen, AttachImage(_image_from_form()))
        screen = reduce(screen, StartDiagnosis())
        if screen.loading:
            attempted = True
            result = plant_ai.diagnose_plant_issue(screen.description, screen.image, **_gemini_settings())
            screen = reduce(screen, DiagnosisFinished(result))
    return components.render_screen(screen, back_url=_back_url(screen), attempted=attempted)

@api_bp.route('/identify', methods=['GET', 'POST'])
def identify():
    screen = reduce(initial_screen(), OpenIdentify())
    attempted = False
    if request.method == 'POST':
        screen = reduce(screen, AttachImage(_image_from_form()))
        screen = reduce(screen, StartIdentification())
        if screen.loading:
            attempted = True
            result = plant_ai.identify_plant(screen.image, **_gemini_settings())
            screen = reduce(screen, IdentificationFinished(result))
    return components.render_screen(screen, back_url=_back_url(screen), attempted=attempted)

@api_bp.route('/identify/confirm', methods=['POST'])
def identify_confirm():
    screen = reduce(initial_screen(), OpenIdentify())
    screen = reduce(screen, PlantFound(request.form.get('plant_name', '')))
    return redirect(url_for_screen(screen))
