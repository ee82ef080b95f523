# src/blueprints/utils/assets.py

from pathlib import Path
from typing import Optional


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "addons" / "templates"


def addon_template_path(
    addon: str,
    filename: Optional[str] = None,
    templates_dir: Path = TEMPLATES_DIR,
) -> Path:
    base = templates_dir / addon
    return base / filename if filename else base
