"""Helper functions for Jinja2 templates."""

from pathlib import Path
from typing import Dict, List, Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from cvgenius.utils.irish_formatting import (
    format_date_range,
    format_irish_phone,
    format_locale_date,
)


TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

SKILL_CATEGORY_LABELS = {
    "Technical": "Programming Languages",
    "Software": "Frameworks/Tools",
    "Soft": "Soft Skills",
    "Other": "Other Skills",
}

SKILL_LEVEL_WIDTHS = {
    "Beginner": "25%",
    "Intermediate": "50%",
    "Advanced": "75%",
    "Expert": "100%",
}


def group_skills_by_category(skills: List[Dict[str, str]]) -> Dict[str, List[str]]:
    """
    Group skills by display category, keeping first-seen category order.

    Args:
        skills: List of skill dictionaries with 'category' and 'name' keys

    Returns:
        Dict[str, List[str]]: Dictionary mapping category label to skill names
    """
    grouped: Dict[str, List[str]] = {}

    for skill in skills:
        category = SKILL_CATEGORY_LABELS.get(skill.get("category", ""), skill.get("category") or "Other Skills")
        grouped.setdefault(category, []).append(skill.get("name", ""))

    return grouped


def skill_width(level: str) -> str:
    """Width of a skill bar for a proficiency level."""
    return SKILL_LEVEL_WIDTHS.get(level, "50%")


def create_environment(template_dir: Optional[Path] = None) -> Environment:
    """
    Create the Jinja2 environment shared by the renderer and stylesheet builder.

    HTML templates are autoescaped, so every user value is entity-escaped
    unless a template explicitly marks it safe (none do).

    Args:
        template_dir: Directory containing Jinja2 templates. Defaults to cvgenius/templates/

    Returns:
        Environment: Configured Jinja2 environment
    """
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    register_jinja_filters(env)
    return env


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters["locale_date"] = format_locale_date
    env.filters["date_range"] = format_date_range
    env.filters["irish_phone"] = format_irish_phone
    env.filters["skill_width"] = skill_width
    env.filters["http_url"] = http_url


def http_url(value: str) -> str:
    """Return the URL when it is an http(s) link, otherwise an empty string."""
    if value and value.strip().lower().startswith(("http://", "https://")):
        return value.strip()
    return ""
