"""FastAPI glue for the Google credentials plugins.

Turns flow outcomes into framework responses: a router serving the web
login redirect and callback, and a dependency resolving bearer tokens.
"""

from __future__ import annotations

import dataclasses

from http import HTTPStatus
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .redirect import GoogleCredentials
    from .token import GoogleTokenCredentials, ProfileT


def create_auth_router(credentials: GoogleCredentials, path: str = "/auth/google") -> APIRouter:
    """Create a router that runs Google web login at ``path``.

    The same route starts the flow and receives Google's callback, so
    ``credentials.callback_url`` should point at it.

    Parameters
    ----------
    credentials : GoogleCredentials
        The configured redirect flow.
    path : str
        Route path (default "/auth/google").

    Returns
    -------
    APIRouter
        Router to include in the application.
    """
    router = APIRouter()

    @router.get(path)
    async def google_login(request: Request) -> Response:
        outcome = await credentials.authenticate(request)
        if outcome.is_in_progress and outcome.redirect_url:
            return RedirectResponse(outcome.redirect_url, status_code=HTTPStatus.FOUND)
        if outcome.is_success and outcome.profile is not None:
            return JSONResponse(dataclasses.asdict(outcome.profile))
        return JSONResponse(
            {"detail": "Unauthorized"},
            status_code=outcome.status or HTTPStatus.UNAUTHORIZED,
            headers=outcome.headers,
        )

    return router


def google_token_dependency(
    credentials: GoogleTokenCredentials[ProfileT],
) -> Callable[[Request], Awaitable[ProfileT | None]]:
    """Build a FastAPI dependency resolving the request's Google token.

    The dependency returns the typed profile on success and ``None`` when
    the request does not declare a Google token, so a route can fall back
    to another mechanism. A declared but missing or rejected token raises
    ``HTTPException(401)``.
    """

    async def dependency(request: Request) -> Any:
        outcome = await credentials.authenticate(request)
        if outcome.is_success:
            return outcome.profile
        if outcome.is_pass:
            return None
        raise HTTPException(
            status_code=outcome.status or HTTPStatus.UNAUTHORIZED,
            headers=outcome.headers,
        )

    return dependency
