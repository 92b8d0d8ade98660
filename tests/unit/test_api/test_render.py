"""
Template Renderer Unit Tests
"""

from datetime import datetime, timezone

import pytest
from jinja2 import TemplateError
from starlette.requests import Request

from cortexcache.api.render import TemplateRenderer
from cortexcache.common.errors import ServerError
from cortexcache.config import PACKAGE_DIR
from cortexcache.domain.snippet import SnippetModel
from cortexcache.middleware.session import Session


@pytest.fixture
def renderer() -> TemplateRenderer:
    renderer = TemplateRenderer(str(PACKAGE_DIR / "templates"))
    renderer.load()
    return renderer


def _request(session: Session | None = None) -> Request:
    request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})
    if session is not None:
        request.state.session = session
    return request


def test_load_registers_every_page(renderer):
    assert renderer.pages == {"home.html", "view.html", "create.html"}


def test_load_rejects_broken_template(tmp_path):
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "broken.html").write_text("{% block main %}")

    with pytest.raises(TemplateError):
        TemplateRenderer(str(tmp_path)).load()


def test_render_unknown_page(renderer):
    with pytest.raises(ServerError) as exc_info:
        renderer.render(_request(), 200, "missing.html", {})

    assert exc_info.value.status_code == 500
    assert exc_info.value.code == "template_not_found"


def test_render_escapes_content(renderer):
    snippet = SnippetModel(
        id=3,
        title="<b>Title</b>",
        content="<script>alert(1)</script>",
        created=datetime(2024, 3, 17, 10, 15, tzinfo=timezone.utc),
        expires=datetime(2024, 3, 24, 10, 15, tzinfo=timezone.utc),
    )
    request = _request()
    data = renderer.new_template_data(request)
    data["snippet"] = snippet

    response = renderer.render(request, 200, "view.html", data)
    body = response.body.decode()

    assert response.status_code == 200
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in body
    assert "<script>alert(1)</script>" not in body
    assert "17 Mar 2024 at 10:15" in body
    assert "24 Mar 2024 at 10:15" in body


def test_render_status_code(renderer):
    request = _request()
    data = renderer.new_template_data(request)
    data["snippets"] = []

    response = renderer.render(request, 418, "home.html", data)

    assert response.status_code == 418
    assert "There's nothing to see here... yet!" in response.body.decode()


class TestNewTemplateData:
    """Tests for the default template data."""

    def test_current_year(self, renderer):
        data = renderer.new_template_data(_request())
        assert data["current_year"] == datetime.now(timezone.utc).year
        assert data["flash"] == ""

    def test_flash_is_consumed(self, renderer):
        session = Session(token="tok", data={"flash": "Snippet successfully created!"})

        data = renderer.new_template_data(_request(session))

        assert data["flash"] == "Snippet successfully created!"
        assert not session.exists("flash")
        assert session.modified is True

    def test_no_flash_leaves_session_untouched(self, renderer):
        session = Session(token="tok", data={"other": 1})

        data = renderer.new_template_data(_request(session))

        assert data["flash"] == ""
        assert session.modified is False
