"""Token analysis endpoints: single contract and symbol-wide."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from tokenrisk.api.dependencies import get_container, limiter
from tokenrisk.services.container import ServiceContainer
from tokenrisk.services.errors import AnalysisError

router = APIRouter(prefix="/api", tags=["tokens"])


class CheckTokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contract_address: str | None = Field(None, alias="contractAddress", max_length=128)
    network: str | None = Field(None, max_length=32)


def _failure(e: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to analyze token", "details": str(e)},
    )


async def _check_token(
    container: ServiceContainer, contract_address: str | None, network: str | None
) -> Any:
    try:
        result = await container.token_analyzer.analyze_token(contract_address, network)
    except AnalysisError:
        raise
    except Exception as e:
        logger.error(f"[API] check-token {network}:{contract_address} failed: {e}")
        return _failure(e)
    return result.to_json_dict()


@router.post("/check-token")
@limiter.limit("30/minute")
async def check_token(
    request: Request,
    body: CheckTokenRequest,
    container: ServiceContainer = Depends(get_container),
) -> Any:
    """Analyse one contract on one network."""
    return await _check_token(container, body.contract_address, body.network)


@router.get("/check-token")
@limiter.limit("30/minute")
async def check_token_query(
    request: Request,
    contract_address: str | None = Query(None, alias="contractAddress", max_length=128),
    network: str | None = Query(None, max_length=32),
    container: ServiceContainer = Depends(get_container),
) -> Any:
    return await _check_token(container, contract_address, network)


@router.get("/check-symbol/{symbol}")
@limiter.limit("20/minute")
async def check_symbol(
    request: Request,
    symbol: str = Path(min_length=1, max_length=20, pattern=r"^[A-Za-z0-9.\-_]+$"),
    container: ServiceContainer = Depends(get_container),
) -> Any:
    """Multi-chain (or native) analysis of a ticker symbol, cached."""
    try:
        return await container.analyze_symbol(symbol)
    except Exception as e:
        logger.error(f"[API] check-symbol {symbol} failed: {e}")
        return _failure(e)
