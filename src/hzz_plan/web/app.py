"""FastAPI web server for HZZ plan drafting.

Generates the business sections of an application from an intake
questionnaire, sanitizes them with the validation pipeline, and refuses to
hand back a draft that needed any correction (the client asks for a
regeneration instead).

Usage:
    python -m hzz_plan.web.app
    # => Uvicorn running on http://localhost:8000
"""

import asyncio
import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hzz_plan import config
from hzz_plan.exceptions import ConfigurationError, GenerationError
from hzz_plan.generation.client import generate_sections
from hzz_plan.generation.intake import IntakeData, merge_intake
from hzz_plan.schema.registry import load_registry
from hzz_plan.validation.pipeline import run

logger = logging.getLogger(__name__)

SERVICE_NAME = "HZZ plan generation (intake)"

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class GenerateFromIntakeRequest(BaseModel):
    """Body of ``POST /api/generate/from-intake``."""

    model_config = ConfigDict(populate_by_name=True)

    app_id: str = Field(min_length=1)
    intake_data: IntakeData = Field(alias="intakeData")


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse({"success": False, "error": message, **extra}, status_code=status_code)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Load the field catalog once at startup so a broken catalog fails fast."""
    registry = load_registry()
    logger.info("Field catalog v%s ready (%d business sections)", registry.version, len(registry.business_sections()))
    yield


app = FastAPI(title="HZZ Plan", lifespan=lifespan)


@app.get("/api/generate/from-intake")
async def generation_health():
    return {"service": SERVICE_NAME, "status": "operational", "model": config.GENERATION_MODEL}


@app.post("/api/generate/from-intake")
async def generate_from_intake(request: Request):
    """Generate, sanitize, and merge a draft; any validation issue fails the request."""
    try:
        body = GenerateFromIntakeRequest.model_validate(await request.json())
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Rejected generation request: %s", exc)
        return _error(400, "Missing required fields")

    logger.info("Starting generation for app_id %s", body.app_id)
    registry = load_registry()

    try:
        raw = await asyncio.to_thread(generate_sections, body.intake_data, registry)
    except ConfigurationError as exc:
        logger.error("Generation not configured: %s", exc)
        return _error(500, str(exc))
    except GenerationError as exc:
        return _error(502, str(exc))

    result = run(raw, registry)
    if not result.success:
        logger.warning("Draft for app_id %s failed validation with %d issue(s)", body.app_id, len(result.issues))
        return _error(422, "Generated data failed validation", issues=result.messages())

    document = merge_intake(body.intake_data, result.data, registry)
    logger.info("Draft for app_id %s ready (%d sections)", body.app_id, len(document))
    return {"success": True, "data": document}


@app.post("/api/validate")
async def validate_document(request: Request):
    """Sanitize a posted raw document and report its issues (always 200)."""
    try:
        raw = await request.json()
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="Request body must be JSON") from exc
    return run(raw, load_registry()).as_payload()


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main():
    """Start the web server via uvicorn."""
    import uvicorn  # pylint: disable=import-outside-toplevel

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
