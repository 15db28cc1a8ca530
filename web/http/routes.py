"""HTTP routes for the scenario API."""

import base64
import hashlib
import json
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response, status

from app.container import Container
from settings import SEARCH_CACHE_CONTROL, SNAPSHOT_CACHE_CONTROL, TRENDING_LIMIT_PER_LOCALE
from web.api import scenarios
from web.api.scenarios.schemas import ApiModel, CreateScenarioRequest

router = APIRouter()


def _container(request: Request) -> Container:
    return request.app.state.container


def _etag(body: bytes) -> str:
    digest = base64.b64encode(hashlib.sha1(body).digest()).decode()[:27]
    return f'W/"{digest}"'


def json_response(
    request: Request,
    model: ApiModel,
    cache_control: str,
    status_code: int = status.HTTP_200_OK,
    etag: bool = False,
) -> Response:
    """Serialize with aliases; answer 304 when the client already has this body."""
    body = json.dumps(model.model_dump(mode="json", by_alias=True), separators=(",", ":")).encode()
    headers = {"Cache-Control": cache_control}
    if etag:
        headers["ETag"] = _etag(body)
        if request.headers.get("if-none-match") == headers["ETag"]:
            return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers=headers)
    return Response(content=body, status_code=status_code, media_type="application/json", headers=headers)


@router.get("/health", summary="Readiness probe")
def health(request: Request) -> dict:
    container = _container(request)
    return {
        "status": "ok",
        "db": container.db.connected,
        "cache": container.cache_backend.stats(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/scenarios/search", summary="Filter and page public scenarios")
def search(request: Request) -> Response:
    params = {key: request.query_params.getlist(key) for key in request.query_params.keys()}
    result = scenarios.search_scenarios(_container(request), params)
    return json_response(request, result, SEARCH_CACHE_CONTROL, etag=True)


@router.get("/scenarios/trending", summary="Trending scenarios from the last snapshot")
def trending(
    request: Request,
    locale: str | None = None,
    limit: int = TRENDING_LIMIT_PER_LOCALE,
) -> Response:
    result = scenarios.get_trending(_container(request), locale, limit)
    return json_response(request, result, SNAPSHOT_CACHE_CONTROL)


@router.get("/scenarios/categories", summary="Category counts from the last snapshot")
def categories(request: Request, locale: str | None = None) -> Response:
    result = scenarios.get_categories(_container(request), locale)
    return json_response(request, result, SNAPSHOT_CACHE_CONTROL)


@router.get("/scenarios/{slug}", summary="One public scenario with its projection")
def scenario_detail(request: Request, slug: str, locale: str | None = None) -> Response:
    result = scenarios.get_scenario(_container(request), locale, slug)
    return json_response(request, result, "public, max-age=30, s-maxage=60")


@router.post("/scenarios", summary="Create a scenario", status_code=status.HTTP_201_CREATED)
def create(request: Request, body: CreateScenarioRequest) -> Response:
    result = scenarios.create_scenario(_container(request), body)
    return json_response(request, result, "no-store", status_code=status.HTTP_201_CREATED)
