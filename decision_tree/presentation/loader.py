"""
Jinja2 loader for the tree markup templates.

Every name in `Template` must have a matching .jinja2 file; this is
checked once at import so a missing template fails at startup rather than
on the first render.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"
SUFFIX = ".jinja2"


def _template_names():
    return [value for key, value in vars(Template).items() if not key.startswith("_")]


def _check_templates():
    missing = [name for name in _template_names() if not (TEMPLATES_DIR / f"{name}{SUFFIX}").is_file()]
    if missing:
        raise FileNotFoundError(f"Missing tree templates in {TEMPLATES_DIR}: {', '.join(missing)}")


_check_templates()


@lru_cache(maxsize=1)
def _environment() -> Environment:
    # Step titles, answers and summary text are page content: always escape
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(default=True, default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render(template_name: str, **context) -> str:
    """Renders `template_name` (a Template constant) with `context`."""
    return _environment().get_template(f"{template_name}{SUFFIX}").render(**context)
