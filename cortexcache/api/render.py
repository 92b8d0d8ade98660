"""
Template Rendering Module

Page templates are compiled once when the renderer is loaded and then
shared, read-only, by every request.
"""

import logging
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from cortexcache.common.errors import ServerError
from cortexcache.common.time import human_date, utc_now

logger = logging.getLogger(__name__)

PAGES_DIR = "pages"


class TemplateRenderer:
    """
    Template Renderer

    Every page in `<directory>/pages` extends `base.html` and may include
    anything under `<directory>/partials`.
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.templates = Jinja2Templates(directory=str(self.directory))
        self.templates.env.filters["human_date"] = human_date
        self._pages: set[str] = set()

    def load(self) -> None:
        """
        Compile every page template

        Raises:
            jinja2.TemplateError: A page (or a template it extends/includes) is invalid
        """
        for path in sorted((self.directory / PAGES_DIR).glob("*.html")):
            self.templates.get_template(f"{PAGES_DIR}/{path.name}")
            self._pages.add(path.name)
        logger.info("Loaded %d page templates from %s", len(self._pages), self.directory)

    @property
    def pages(self) -> set[str]:
        return set(self._pages)

    def new_template_data(self, request: Request) -> dict[str, Any]:
        """
        Default template data for a request

        Consumes the flash message if the request carries a session.
        """
        session = getattr(request.state, "session", None)
        return {
            "current_year": utc_now().year,
            "flash": session.pop("flash", "") if session is not None else "",
        }

    def render(
        self,
        request: Request,
        status_code: int,
        page: str,
        data: dict[str, Any],
    ) -> HTMLResponse:
        """
        Render a page

        Raises:
            ServerError: The page was not loaded
        """
        if page not in self._pages:
            raise ServerError(
                message=f"The template {page} does not exist",
                code="template_not_found",
            )
        return self.templates.TemplateResponse(
            request, f"{PAGES_DIR}/{page}", data, status_code=status_code
        )
