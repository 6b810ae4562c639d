"""Starlette ASGI application serving one CrabScore report."""

from __future__ import annotations

import logging

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from ..report.generator import generate_html, generate_json
from ..score import CrabScore

logger = logging.getLogger(__name__)


def create_app(score: CrabScore) -> Starlette:
    """Build the dashboard application for a fixed *score*.

    Routes:
        ``/`` and ``/report.html``: the HTML report page
        ``/data.json``: the JSON report
    """
    page = generate_html(score)
    data = generate_json(score).to_dict()

    async def homepage(request: Request) -> HTMLResponse:
        return HTMLResponse(page)

    async def report_data(request: Request) -> JSONResponse:
        return JSONResponse(data)

    routes = [
        Route("/", homepage),
        Route("/report.html", homepage),
        Route("/data.json", report_data),
    ]

    logger.debug("Dashboard app created for overall score %.2f", score.overall)
    return Starlette(routes=routes)
