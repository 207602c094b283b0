"""FastAPI server — HTTP access to the GEM controller optimizer.

Run with:
    uvicorn gem_optimizer.api.server:app --reload --port 8000

Or:
    python -m gem_optimizer.api.server

Endpoints:
    GET  /health                  — liveness probe
    GET  /                        — welcome + endpoint list
    GET  /functions               — catalog: description, factory default, bound
    GET  /defaults                — default input + factory settings vector
    GET  /presets                 — named presets
    POST /validate                — plausibility checks on an input
    POST /optimize                — base optimization (partial input + optional baseline)
    POST /optimize/preset/{name}  — optimize starting from a preset
    POST /optimize/trip           — trip-aware optimization
    POST /export                  — optimize and return the versioned envelope
    POST /import                  — parse an envelope (409 on version mismatch)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from gem_optimizer.api.narrative import generate_narrative, generate_trip_narrative
from gem_optimizer.config.loader import build_optimization_input, build_trip_data
from gem_optimizer.config.presets import PRESETS, preset_request
from gem_optimizer.config.request import OptimizationInput
from gem_optimizer.config.validation import validate_configuration
from gem_optimizer.engine.catalog import (
    FACTORY_DEFAULTS,
    FUNCTION_COUNT,
    FUNCTION_DESCRIPTIONS,
    SAFETY_CONSTRAINTS,
    get_factory_defaults,
)
from gem_optimizer.engine.orchestrator import optimize
from gem_optimizer.errors import IncompatibleVersionError, OptimizerError, format_user_error
from gem_optimizer.export import EXPORT_VERSION, build_envelope, import_configuration
from gem_optimizer.trip.orchestrator import optimize_for_trip

_logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="GEM Controller Optimizer API",
    version="1.0",
    description=(
        "Generates tuned Sevcon T2 controller settings for GEM low-speed "
        "electric vehicles from vehicle, battery, tire and driving-condition "
        "inputs. Every returned vector is clamped to documented safety bounds."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request / response models
# ═══════════════════════════════════════════════════════════════════════════

class OptimizeRequest(BaseModel):
    """Request body for /optimize. All fields optional — defaults used for missing."""
    input: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full OptimizationInput JSON. Missing fields use defaults. "
                    "Example: {'vehicle': {'motor_condition': 'sparking'}, 'environment': {'terrain': 'steep'}}",
    )
    baseline: dict[str, Any] | None = Field(
        default=None,
        description="Optional settings read off the controller, function number → value. "
                    "Invalid entries are dropped.",
    )


class TripRequest(BaseModel):
    """Request body for /optimize/trip."""
    trip: dict[str, Any] = Field(
        default_factory=dict,
        description="Partial or full TripData JSON. "
                    "Example: {'weather': {'temperature_f': 62, 'conditions': 'light rain'}}",
    )


class ImportRequest(BaseModel):
    """Request body for /import."""
    content: str = Field(description="Envelope JSON text exactly as exported")


class OptimizeResponse(BaseModel):
    result: dict[str, Any]
    narrative: str = ""


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_input(overrides: dict[str, Any]) -> OptimizationInput:
    """Partial input merged onto defaults; 422 on invalid values."""
    try:
        return build_optimization_input(overrides)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=format_user_error(exc)) from exc


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "GEM Controller Optimizer API",
        "version": "1.0",
        "export_version": EXPORT_VERSION,
        "start_here": "GET /functions, then POST /optimize",
        "docs": "GET /docs (interactive Swagger UI)",
    }


@app.get("/functions")
def get_functions():
    """All 128 controller functions with description, factory default and safety bound."""
    functions = {}
    for key in range(1, FUNCTION_COUNT + 1):
        bound = SAFETY_CONSTRAINTS.get(key)
        functions[key] = {
            "description": FUNCTION_DESCRIPTIONS.get(key),
            "factory_default": FACTORY_DEFAULTS[key],
            "min": bound.min if bound else None,
            "max": bound.max if bound else None,
        }
    return {"functions": functions}


@app.get("/defaults")
def get_defaults():
    """Default input and the factory settings vector. Use as a starting point."""
    return {
        "input": OptimizationInput().model_dump(mode="json"),
        "factory_settings": get_factory_defaults(),
    }


@app.get("/presets")
def get_presets():
    return {"presets": [preset.model_dump(mode="json") for preset in PRESETS.values()]}


@app.post("/validate")
def validate(req: OptimizeRequest):
    """Plausibility warnings for an input. Never blocks optimization."""
    report = validate_configuration(_build_input(req.input))
    return {"is_valid": report.is_valid, **report.model_dump(mode="json")}


@app.post("/optimize", response_model=OptimizeResponse)
def optimize_endpoint(req: OptimizeRequest):
    """Run the base optimizer.

    Example minimal request:
    ```json
    {"input": {"vehicle": {"motor_condition": "sparking"}, "environment": {"terrain": "steep"}}}
    ```
    """
    result = optimize(_build_input(req.input), req.baseline)
    return OptimizeResponse(result=result.model_dump(mode="json"), narrative=generate_narrative(result))


@app.post("/optimize/preset/{name}", response_model=OptimizeResponse)
def optimize_preset(name: str, req: OptimizeRequest):
    """Optimize using a preset's priorities and settings as the starting point."""
    if name not in PRESETS:
        raise HTTPException(status_code=404, detail=f"Unknown preset '{name}'")
    try:
        request, baseline = preset_request(name, req.input)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=format_user_error(exc)) from exc
    result = optimize(request, baseline)
    return OptimizeResponse(result=result.model_dump(mode="json"), narrative=generate_narrative(result))


@app.post("/optimize/trip", response_model=OptimizeResponse)
def optimize_trip(req: TripRequest):
    try:
        trip = build_trip_data(req.trip)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=format_user_error(exc)) from exc
    result = optimize_for_trip(trip)
    return OptimizeResponse(result=result.model_dump(mode="json"), narrative=generate_trip_narrative(result))


@app.post("/export")
def export_endpoint(req: OptimizeRequest):
    """Optimize and return the result as a versioned configuration envelope."""
    result = optimize(_build_input(req.input), req.baseline)
    return build_envelope(result).model_dump(mode="json", by_alias=True)


@app.post("/import")
def import_endpoint(req: ImportRequest):
    try:
        envelope = import_configuration(req.content)
    except IncompatibleVersionError as exc:
        raise HTTPException(status_code=409, detail=format_user_error(exc)) from exc
    except (OptimizerError, ValidationError) as exc:
        raise HTTPException(status_code=422, detail=format_user_error(exc)) from exc
    return envelope.model_dump(mode="json", by_alias=True)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    _logger.info("Starting GEM optimizer API on port 8000")
    uvicorn.run(
        "gem_optimizer.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
