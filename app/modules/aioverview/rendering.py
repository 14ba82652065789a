from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
INDEX_TEMPLATE = "index.html"

_SAFE_SCHEMES = {"http", "https"}


def safe_href(url: Optional[str]) -> str:
    """Pass through http(s) links; anything else becomes `#`."""
    if not url:
        return "#"
    if urlsplit(url.strip()).scheme.lower() not in _SAFE_SCHEMES:
        return "#"
    return url


def build_templates(directory: Path = TEMPLATES_DIR) -> Jinja2Templates:
    """Create the page template environment (autoescape is on by default)."""
    templates = Jinja2Templates(directory=str(directory))
    templates.env.filters["safe_href"] = safe_href
    return templates
