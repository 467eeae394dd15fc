from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape


def _build_env(template_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(enabled_extensions=("html", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class TemplateRenderer:
    """
    Thin wrapper around Jinja2 so the HTML export and any future views share
    templates. A missing template renders a short placeholder instead.
    """

    def __init__(self, template_dir: Path):
        self.template_dir = template_dir
        self.env = _build_env(template_dir)

    def render(self, template_name: str, payload: Dict[str, Any]) -> str:
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound:
            return f"[Missing template: {template_name}]"
        return template.render(**payload)
