"""Pytest configuration and fixtures."""

from collections.abc import Callable

import httpx
import pytest

from hamvaxmap.config.settings import Settings

SOURCE_HOST = "www.kvhh.net"
GEOCODE_HOST = "maps.googleapis.com"


def make_row(name: str, line1: str | None, line2: str | None, hint: str) -> str:
    """Build one KVHH table row; a None line leaves its paragraph out."""
    paragraphs = "".join(f"<p>{line}</p>" for line in (line1, line2) if line is not None)
    return (
        "<tr>"
        "<td>Hausarzt</td>"
        f"<td>{name}</td>"
        f"<td>{paragraphs}</td>"
        f"<td>{hint}</td>"
        "</tr>"
    )


def make_document(*rows: str) -> str:
    """Wrap rows in the page structure the KVHH decoder expects."""
    return f"""
    <!DOCTYPE html>
    <html>
    <head><title>Corona-Impfpraxen</title></head>
    <body>
        <main>
            <h1>Sie suchen eine Corona-Impfpraxis?</h1>
            <figure class="table">
                <table>
                    <tbody>
                        <tr><th>Fachrichtung</th><th>Praxis</th><th>Adresse</th><th>Hinweis</th></tr>
                        {"".join(rows)}
                    </tbody>
                </table>
            </figure>
        </main>
    </body>
    </html>
    """


def geocode_payload(lat: float, lng: float) -> dict:
    """Geocoding API body with a single candidate."""
    return {
        "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}],
        "status": "OK",
    }


EMPTY_GEOCODE_PAYLOAD = {"results": [], "status": "ZERO_RESULTS"}


@pytest.fixture
def settings() -> Settings:
    """Settings with a fake credential and no progress bars."""
    return Settings(geocode_api_key="test-key", show_progress=False)


@pytest.fixture
def sample_html() -> str:
    """Two-practice KVHH page."""
    return make_document(
        make_row("Dr. X", " Street 1 ", "12345 City", "Mon–Fri"),
        make_row("Praxis Y", "Mönckebergstraße 7", "20095 Hamburg", "nur Bestandspatienten"),
    )


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """
    Build a mock transport serving the source page and geocode answers.

    ``geocode`` maps an address to either a JSON body or an httpx.Response.
    Addresses not in the map get an empty result list. Every request is
    appended to ``requests`` for inspection.
    """

    def factory(
        document: str = "",
        geocode: dict | None = None,
        source_status: int = 200,
        requests: list[httpx.Request] | None = None,
    ) -> httpx.MockTransport:
        answers = geocode or {}

        def handler(request: httpx.Request) -> httpx.Response:
            if requests is not None:
                requests.append(request)

            if request.url.host == SOURCE_HOST:
                return httpx.Response(source_status, text=document)

            if request.url.host == GEOCODE_HOST:
                answer = answers.get(request.url.params["address"], EMPTY_GEOCODE_PAYLOAD)
                if isinstance(answer, httpx.Response):
                    return answer
                return httpx.Response(200, json=answer)

            return httpx.Response(404)

        return httpx.MockTransport(handler)

    return factory
