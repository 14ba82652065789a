import pytest
from fastapi.templating import Jinja2Templates
from fastapi.testclient import TestClient
from jinja2 import DictLoader, Environment

from app.main import create_app
from app.modules.aioverview.api.router import get_overview_service, get_templates
from app.modules.aioverview.errors import FetchError
from app.modules.aioverview.services.overview_service import OverviewService
from core.conf import Settings, get_settings


@pytest.fixture
def app():
    app = create_app(Settings())
    app.dependency_overrides[get_settings] = lambda: Settings(SERPAPI_API_KEY="test-key")
    return app


@pytest.fixture
def use_client(app, fake_client_factory):
    """Install a fake SerpAPI client replaying `responses`; returns it."""

    def _use(*responses):
        client = fake_client_factory(*responses)
        app.dependency_overrides[get_overview_service] = lambda: OverviewService(client)
        return client

    return _use


@pytest.fixture
def http(app):
    return TestClient(app)


def test_create_app_wires_state(app):
    assert isinstance(app.state.overview_service, OverviewService)
    assert app.state.templates is not None
    assert app.state.serpapi is app.state.overview_service.client


def test_healthz(http):
    response = http.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_index_without_query(http, use_client):
    client = use_client()

    response = http.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'name="q"' in response.text
    assert "No AI Overview found" not in response.text
    assert "AI Overview Result" not in response.text
    assert client.calls == []


def test_index_renders_inline_overview(http, use_client, overview_payload):
    client = use_client({"ai_overview": overview_payload})

    response = http.get("/", params={"q": "nasi goreng"})

    assert response.status_code == 200
    assert response.text.count('class="text-block"') == 2
    assert response.text.count('class="reference"') == 3
    assert 'value="nasi goreng"' in response.text
    assert len(client.calls) == 1
    assert client.calls[0]["api_key"] == "test-key"


def test_index_follows_page_token(http, use_client, overview_payload, token_payload):
    client = use_client({"ai_overview": token_payload}, {"ai_overview": overview_payload})

    response = http.get("/", params={"q": "nasi goreng"})

    assert response.status_code == 200
    assert "AI Overview Result" in response.text
    assert [call["params"]["engine"] for call in client.calls] == ["google", "google_ai_overview"]


def test_index_not_found(http, use_client):
    use_client({"organic_results": []})

    response = http.get("/", params={"q": "obscure <query>"})

    assert response.status_code == 200
    assert "No AI Overview found for: obscure &lt;query&gt;" in response.text
    assert "ai overview not found" in response.text


def test_index_fetch_error_renders_inline(http, use_client, caplog):
    use_client(FetchError("SerpAPI returned HTTP 401: Invalid API key"))

    with caplog.at_level("WARNING"):
        response = http.get("/", params={"q": "nasi goreng"})

    assert response.status_code == 200
    assert "Invalid API key" in response.text
    assert "No AI Overview found for: nasi goreng" in response.text
    assert any("AI Overview fetch failed" in record.getMessage() for record in caplog.records)


def test_index_decode_error_renders_inline(http, use_client):
    use_client({"ai_overview": {"text_blocks": []}})

    response = http.get("/", params={"q": "nasi goreng"})

    assert response.status_code == 200
    assert "failed to decode SearchMetadata" in response.text


def test_index_render_failure_returns_500(app, http, use_client):
    use_client()
    broken = Jinja2Templates(env=Environment(loader=DictLoader({"index.html": "{{ missing_helper() }}"})))
    app.dependency_overrides[get_templates] = lambda: broken

    response = http.get("/")

    assert response.status_code == 500
    assert response.text == "Error rendering page"


def test_create_app_serves_routes(fake_client_factory):
    app = create_app(Settings(LOG_LEVEL="DEBUG"))
    app.dependency_overrides[get_overview_service] = lambda: OverviewService(fake_client_factory())
    http = TestClient(app)

    assert http.get("/").status_code == 200
    assert http.get("/healthz").status_code == 200


def test_docs_disabled_by_default(http):
    assert http.get("/docs").status_code == 404
    assert http.get("/openapi.json").status_code == 404


def test_docs_enabled_in_dev():
    http = TestClient(create_app(Settings(ENVIRONMENT="dev")))

    assert http.get("/openapi.json").status_code == 200
