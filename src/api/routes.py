import json
import logging
from typing import Optional

from aiohttp import web
from pydantic import ValidationError

from src.application.profile_service import ProfileService
from src.domain.exceptions import CreationError, NotFoundError, UpstreamError
from src.domain.models import ProfileInput

logger = logging.getLogger(__name__)

PROFILE_SERVICE = web.AppKey("profile_service", ProfileService)

routes = web.RouteTableDef()


def _error(status: int, message: str, **extra) -> web.Response:
    return web.json_response({"message": message, **extra}, status=status)


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Maps domain errors onto HTTP status codes."""
    try:
        return await handler(request)
    except NotFoundError as e:
        return _error(404, str(e))
    except CreationError as e:
        return _error(400, str(e))
    except UpstreamError as e:
        return _error(502, str(e))
    except web.HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unhandled error on {request.method} {request.path}: {e}")
        return _error(500, "Internal server error")


async def _read_body(request: web.Request) -> ProfileInput:
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise web.HTTPBadRequest(
            text=json.dumps({"message": "Request body must be JSON"}),
            content_type="application/json",
        )
    try:
        return ProfileInput.model_validate(payload)
    except ValidationError as e:
        raise web.HTTPBadRequest(
            text=json.dumps({"message": "Invalid github-profile body", "errors": json.loads(e.json(include_url=False))}),
            content_type="application/json",
        )


@routes.post("/github")
async def create_profile(request: web.Request) -> web.Response:
    body = await _read_body(request)
    profile_id = await request.app[PROFILE_SERVICE].create(body)
    return web.json_response({"id": profile_id}, status=201)


@routes.get("/github")
async def list_profiles(request: web.Request) -> web.Response:
    profiles = await request.app[PROFILE_SERVICE].find_all()
    return web.json_response([p.model_dump(mode="json", by_alias=True) for p in profiles])


@routes.get("/github/{id}")
async def get_profile(request: web.Request) -> web.Response:
    profile = await request.app[PROFILE_SERVICE].find_one(request.match_info["id"])
    return web.json_response(profile.model_dump(mode="json", by_alias=True))


@routes.put("/github/{id}")
async def update_profile(request: web.Request) -> web.Response:
    body = await _read_body(request)
    profile_id = await request.app[PROFILE_SERVICE].update(request.match_info["id"], body)
    return web.json_response({"id": profile_id})


@routes.delete("/github/{id}")
async def delete_profile(request: web.Request) -> web.Response:
    result = await request.app[PROFILE_SERVICE].remove(request.match_info["id"])
    if result is None:
        return _error(500, "Delete was not confirmed by the store")
    return web.json_response(result.model_dump())


def create_app(service: Optional[ProfileService] = None) -> web.Application:
    """
    Builds the web application. Without a service, one must be stored under
    PROFILE_SERVICE before the first request, e.g. from a cleanup context.
    """
    app = web.Application(middlewares=[error_middleware])
    if service is not None:
        app[PROFILE_SERVICE] = service
    app.add_routes(routes)
    return app
