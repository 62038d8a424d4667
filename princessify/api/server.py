"""
Princessify: Conversion API Server
==================================

Thin HTTP surface over the converter. Holds no per-request state.

Endpoints:
- GET  /health           -> Liveness
- POST /api/v1/convert   -> Annotated document

Usage:
    uvicorn princessify.api.server:app --reload
"""
import os
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..engine import ConvertOptions, ConverterConfig, Princessify
from ..contracts.base import RosterUndeterminedError

logger = logging.getLogger(__name__)

# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

converter_instance: Optional[Princessify] = None
default_channel_mode: bool = False


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the converter on startup."""
    global converter_instance, default_channel_mode

    default_channel_mode = _env_flag("PRINCESSIFY_CHANNEL_MODE")
    converter_instance = Princessify(ConverterConfig())
    logger.info("Converter initialized (channel_mode default=%s)", default_channel_mode)

    yield

    logger.info("Shutting down converter")
    converter_instance = None


app = FastAPI(
    title="Princessify API",
    version="0.1.0",
    description="Timeline readiness annotator",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# =============================================================================
# SCHEMAS
# =============================================================================

class ConvertRequest(BaseModel):
    document: str
    channel_mode: Optional[bool] = None


class ConvertResponse(BaseModel):
    mode: Optional[str]
    text: Optional[str]
    roster: List[str]
    entry_count: int


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    """System status."""
    if not converter_instance:
        raise HTTPException(status_code=503, detail="Converter not initialized")
    return {"status": "online", "mode": "converter"}


@app.post("/api/v1/convert", response_model=ConvertResponse)
async def convert_document(request: ConvertRequest):
    """
    Convert one document.

    Roster undetermined surfaces as 422 with the guidance text; a
    non-timeline under channel mode returns text=null.
    """
    if not converter_instance:
        raise HTTPException(503, detail="Converter not initialized")

    channel_mode = default_channel_mode if request.channel_mode is None else request.channel_mode

    try:
        result = converter_instance.run(request.document, ConvertOptions(channel_mode=channel_mode))
    except RosterUndeterminedError as exc:
        raise HTTPException(
            status_code=422,
            detail={"code": exc.code.name, "guidance": exc.guidance}
        )

    return ConvertResponse(**result.to_dict())
