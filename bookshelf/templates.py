"""Rendering of the HTML views."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2


class TemplateRenderer:
    """Loads every ``*.html`` view in a directory and renders them by name."""

    def __init__(self, views_dir: str | Path) -> None:
        directory = Path(views_dir)
        files = sorted(directory.glob("*.html"))
        if not files:
            raise FileNotFoundError(f"no templates match {directory / '*.html'}")
        self.names = frozenset(path.stem for path in files)
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(directory)),
            autoescape=jinja2.select_autoescape(["html"]),
        )

    def render(self, name: str, data: Any = None) -> str:
        """Render the named view with ``data`` available as ``data``."""
        template_name = f"{name}.html" if name in self.names else name
        return self._env.get_template(template_name).render(data=data)