#!/usr/bin/env python3
"""
nearsyn FastAPI Server
Provides REST API for TypeScript bindings, Markdown docs and contract descriptions
"""
import logging
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from nearsyn.core.config import GENERATOR_VERSION, load_settings
from nearsyn.core.contract import DuplicatePolicy
from nearsyn.core.errors import NearSynError
from nearsyn.core.transpiler import build_contract
from nearsyn.generators import generate_markdown, generate_typescript
from nearsyn.output import ContractJSONFormatter
from nearsyn.parser import RawUnit, load_unit

logger = logging.getLogger(__name__)


# ============================================================================
# Request/Response Models
# ============================================================================

class ContractRequest(BaseModel):
    units: List[RawUnit] = []
    now: Optional[str] = None
    bindgen_only: bool = False
    duplicates: DuplicatePolicy = DuplicatePolicy.OVERWRITE


class OutputResponse(BaseModel):
    success: bool
    output: Optional[str] = None
    error: Optional[str] = None


class ContractResponse(BaseModel):
    success: bool
    contract: Optional[dict] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    version: str


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="nearsyn API",
    description="TypeScript bindings and documentation for NEAR contracts",
    version=GENERATOR_VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _build(request: ContractRequest):
    units = [load_unit(unit) for unit in request.units]
    model = build_contract(units, duplicates=request.duplicates, bindgen_only=request.bindgen_only)
    return model, units


# ============================================================================
# Endpoints
# ============================================================================

@app.get("/", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    return {
        "status": "ok",
        "version": GENERATOR_VERSION,
    }


@app.post("/api/ts", response_model=OutputResponse)
async def typescript(request: ContractRequest):
    """
    Generate TypeScript bindings for the given declaration units.

    Example:
        POST /api/ts
        {
            "units": [{"items": [{"kind": "impl", "self_ty": "Contract", ...}]}],
            "now": null
        }
    """
    try:
        model, _ = _build(request)
        return {"success": True, "output": generate_typescript(model, request.now)}
    except NearSynError as e:
        logger.info("TypeScript generation failed: %s", e)
        return {"success": False, "error": str(e)}


@app.post("/api/md", response_model=OutputResponse)
async def markdown(request: ContractRequest):
    """Generate Markdown documentation for the given declaration units"""
    try:
        model, _ = _build(request)
        return {"success": True, "output": generate_markdown(model, request.now)}
    except NearSynError as e:
        logger.info("Markdown generation failed: %s", e)
        return {"success": False, "error": str(e)}


@app.post("/api/contract", response_model=ContractResponse)
async def contract(request: ContractRequest):
    """Describe the exported contract surface as JSON"""
    try:
        model, units = _build(request)
        sources = [unit.path for unit in units if unit.path]
        formatter = ContractJSONFormatter(model, sources, now=request.now or "")
        return {"success": True, "contract": formatter.generate()}
    except NearSynError as e:
        logger.info("Contract description failed: %s", e)
        return {"success": False, "error": str(e)}


# ============================================================================
# Run Server
# ============================================================================

def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Serve the API with uvicorn"""
    import uvicorn

    settings = load_settings()
    host = host or settings.host
    port = port or settings.port

    logger.info("Starting nearsyn API on http://%s:%s (docs at /docs)", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
