"""Presentation helpers shared by the Jinja templates.

Nothing here talks to the network; it only shapes data that was already
fetched into what the templates display.
"""
import re
from typing import Any, Dict, List, Optional

from flask import render_template

from backend.models import PlantCare
from backend.views import View

SCREEN_TEMPLATES = {
    View.HOME: 'home.html',
    View.DETAIL: 'detail.html',
    View.DOCTOR: 'doctor.html',
    View.IDENTIFY: 'identify.html',
}

PLACEHOLDER_IMAGE = 'https://picsum.photos/seed/{seed}/{width}/{height}'


def placeholder_image(name: str, width: int, height: int) -> str:
    seed = re.sub(r'\s', '', name or '') or 'plant'
    return PLACEHOLDER_IMAGE.format(seed=seed, width=width, height=height)


def card_image_url(plant: Any, width: int = 400, height: int = 300) -> str:
    image_url: Optional[str] = getattr(plant, 'image_url', None)
    return image_url or placeholder_image(getattr(plant, 'name', ''), width, height)


def care_cards(care: PlantCare) -> List[Dict[str, Any]]:
    return [
        {'icon': '☀', 'title': '光照', 'description': care.light, 'tone': 'amber', 'wide': False},
        {'icon': '💧', 'title': '浇水', 'description': care.water, 'tone': 'blue', 'wide': False},
        {'icon': '🌡', 'title': '温度', 'description': care.temperature, 'tone': 'red', 'wide': False},
        {'icon': '🌬', 'title': '湿度', 'description': care.humidity, 'tone': 'slate', 'wide': False},
        {'icon': '🌱', 'title': '土壤 & 施肥', 'description': f"{care.soil} {care.fertilizer}", 'tone': 'emerald', 'wide': True},
    ]


def render_screen(screen: Any, **context: Any) -> str:
    template = SCREEN_TEMPLATES[screen.view]
    return render_template(template, screen=screen, **context)


def init_app(app) -> None:
    app.jinja_env.globals.update(
        card_image_url=card_image_url,
        placeholder_image=placeholder_image,
        care_cards=care_cards,
    )
