"""
Snippet Pages

Server-rendered pages for listing, viewing and creating snippets.
All routes here run inside the session layer.
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.datastructures import FormData

from cortexcache.api.deps import CurrentSession, RendererDep, SnippetServiceDep
from cortexcache.common.errors import BadRequestError, NotFoundError
from cortexcache.common.validator import parse_integer, validate_snippet_form
from cortexcache.domain.snippet import SnippetForm
from cortexcache.middleware.session import SessionRoute

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Snippets"], route_class=SessionRoute)

FLASH_CREATED = "Snippet successfully created!"

# Largest id a 64-bit integer primary key can hold
MAX_SNIPPET_ID = 2**63 - 1


def parse_snippet_id(raw: str) -> int:
    """
    Parse a snippet id from the URL

    Raises:
        NotFoundError: Not a positive decimal integer
    """
    try:
        snippet_id = parse_integer(raw)
    except ValueError:
        raise NotFoundError(message=f"Invalid snippet id: {raw!r}", code="invalid_snippet_id")
    if not 1 <= snippet_id <= MAX_SNIPPET_ID:
        raise NotFoundError(message=f"Invalid snippet id: {raw!r}", code="invalid_snippet_id")
    return snippet_id


def _form_value(form: FormData, name: str) -> str:
    value = form.get(name, "")
    if not isinstance(value, str):
        raise BadRequestError(message=f"Field {name} must be text", code="invalid_form")
    return value


@router.get("/", name="home", response_class=HTMLResponse)
async def home(
    request: Request,
    service: SnippetServiceDep,
    renderer: RendererDep,
):
    """Latest snippets."""
    snippets = await service.latest()

    data = renderer.new_template_data(request)
    data["snippets"] = snippets
    return renderer.render(request, status.HTTP_200_OK, "home.html", data)


@router.get("/snippet/view/{id}", name="snippet_view", response_class=HTMLResponse)
async def snippet_view(
    id: str,
    request: Request,
    service: SnippetServiceDep,
    renderer: RendererDep,
):
    """
    Single snippet

    Malformed, non-positive, unknown and expired ids all yield 404.
    """
    snippet = await service.get(parse_snippet_id(id))

    data = renderer.new_template_data(request)
    data["snippet"] = snippet
    return renderer.render(request, status.HTTP_200_OK, "view.html", data)


@router.get("/snippet/create", name="snippet_create", response_class=HTMLResponse)
async def snippet_create(
    request: Request,
    renderer: RendererDep,
):
    """Empty submission form."""
    data = renderer.new_template_data(request)
    data["form"] = SnippetForm()
    return renderer.render(request, status.HTTP_200_OK, "create.html", data)


@router.post("/snippet/create", name="snippet_create_post")
async def snippet_create_post(
    request: Request,
    service: SnippetServiceDep,
    renderer: RendererDep,
    session: CurrentSession,
):
    """
    Handle a submission

    Invalid submissions are re-rendered with inline errors (422) and nothing
    is stored; valid ones redirect to the new snippet.
    """
    form_data = await request.form()

    title = _form_value(form_data, "title")
    content = _form_value(form_data, "content")
    try:
        expires = parse_integer(_form_value(form_data, "expires"))
    except ValueError:
        raise BadRequestError(message="Field expires must be an integer", code="invalid_form")

    form = SnippetForm(
        title=title,
        content=content,
        expires=expires,
        field_errors=validate_snippet_form(title, content, expires),
    )
    if not form.valid:
        logger.debug("Snippet form rejected: %s", form.field_errors)
        data = renderer.new_template_data(request)
        data["form"] = form
        return renderer.render(request, 422, "create.html", data)

    snippet_id = await service.insert(form.title, form.content, form.expires)

    session.put("flash", FLASH_CREATED)
    return RedirectResponse(
        url=f"/snippet/view/{snippet_id}",
        status_code=status.HTTP_303_SEE_OTHER,
    )
