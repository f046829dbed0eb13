"""Select endpoint — Run a query and render it with a response writer.

All query parameters are forwarded to the writer, so writer-specific
parameters (``template``, ``wrap``, ``contentType``, ``responseType``,
``json.wrf``) pass straight through.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from resultwriter.api.deps import get_engine
from resultwriter.core.engine import ResultWriterEngine
from resultwriter.store.exceptions import StoreError
from resultwriter.writers.base.exceptions import RenderError, TemplateError, TypeResolutionError
from resultwriter.writers.base.registry import WriterNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/select",
    summary="Query and Render",
    description=(
        "Execute a query against the result store and render the matches with "
        "the writer named by `wt` (default from configuration).\n\n"
        "**Common parameters:** `q`, `start`, `rows`, `wt`.\n\n"
        "**Template writer parameters:**\n"
        "| Parameter | Effect |\n"
        "|-----------|--------|\n"
        "| `template` | Template name without suffix (default `default`) |\n"
        "| `wrap` | Callback name; wraps output as `name({\"result\":\"...\"})` |\n"
        "| `contentType` | Literal content-type override |\n"
        "| `responseType` | Structured response exposed to the template as `response` |"
    ),
    responses={
        200: {"description": "Rendered body with the writer's content type"},
        400: {"description": "Bad parameters, unknown writer, template or response type"},
        500: {"description": "A stored document could not be read"},
    },
)
def select(
    request: Request,
    engine: ResultWriterEngine = Depends(get_engine),
) -> Response:
    """Execute a query and return the writer's output."""
    params = {key: request.query_params[key] for key in request.query_params.keys()}

    try:
        output = engine.respond(params)
    except (WriterNotFoundError, TemplateError, TypeResolutionError, ValueError) as e:
        logger.warning("Rejected select request: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    except RenderError as e:
        logger.error("Rendering failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Rendering failed: {e!s}") from e
    except StoreError as e:
        logger.error("Result store failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Result store failed: {e!s}") from e

    return Response(content=output.body, media_type=output.content_type)
