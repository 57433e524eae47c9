"""API for the workload advisor: scoring service proxy routes and offline mock."""
import asyncio
import logging
from typing import Any, Dict, List, Union

import fastapi
import httpx
from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from workload_advisor import config, mock_service
from workload_advisor.errors import GatewayError
from workload_advisor.flops_estimator import estimate_flops
from workload_advisor.gateway import RequestGateway
from workload_advisor.hardware_specs import get_hardware_spec
from workload_advisor.schemas import CallType, ErrorResponse, FlopsEstimate


# Setup
def get_http_client() -> httpx.AsyncClient:
    """Instantiate HTTP client for use by the proxy routes."""
    return httpx.AsyncClient(timeout=None)


def app_factory() -> fastapi.FastAPI:
    """Instantiate FastAPI app."""
    app = FastAPI()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.client = get_http_client()
    app.state.gateway = RequestGateway(http_client=app.state.client)
    app.state.optimize_url = config.optimize_url()
    app.state.simulate_url = config.SIMULATION_SERVICE_URL
    app.state.mock_delay = config.MOCK_DELAY
    return app


app = app_factory()


@app.on_event("shutdown")
async def close_http_client():
    await app.state.client.aclose()


async def proxy(
    body: Dict[str, Any], endpoint: str, call_type: CallType
) -> Union[JSONResponse, Dict[str, Any], List[Any]]:
    """Forward a request body upstream, echoing classified failures as {error, details}."""
    logging.info(f"Request body: {body}")
    try:
        data = await app.state.gateway.forward(body, endpoint, call_type)
    except GatewayError as e:
        status_code = e.status_code if e.status_code and e.status_code >= 400 else 500
        return JSONResponse(status_code=status_code, content=e.to_dict())
    logging.info(f"Scoring service response data: {data}")
    return data


# Routes
@app.post("/api/optimize", responses={500: {"model": ErrorResponse}})
async def optimize(body: Dict[str, Any] = Body(...)):
    return await proxy(body, app.state.optimize_url, CallType.RECOMMEND)


@app.post("/api/simulate", responses={500: {"model": ErrorResponse}})
async def simulate(body: Dict[str, Any] = Body(...)):
    return await proxy(body, app.state.simulate_url, CallType.SIMULATE)


@app.post("/api/mock/optimize", responses={500: {"model": ErrorResponse}})
async def mock_optimize(body: Dict[str, Any] = Body(...)):
    logging.info(f"Mock API received: {body}")
    await asyncio.sleep(app.state.mock_delay)
    try:
        return mock_service.mock_recommendation(body)
    except (AttributeError, TypeError) as e:
        logging.error(f"Error in mock API: {e!r}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to process mock request", "details": str(e)},
        )


@app.get("/api/flops", response_model=FlopsEstimate)
def estimate(
    model_type: str = Query(..., min_length=1),
    parameters_millions: float = Query(..., ge=0, allow_inf_nan=False),
) -> FlopsEstimate:
    return FlopsEstimate(
        model_type=model_type,
        parameters_millions=parameters_millions,
        flops_billions=estimate_flops(model_type, parameters_millions),
    )


@app.get("/api/hardware/{hardware_id}")
def hardware_spec(hardware_id: str) -> Dict[str, Any]:
    spec = get_hardware_spec(hardware_id)
    if spec is None:
        raise HTTPException(status_code=404, detail="No specs found for that hardware")
    return spec.to_dict()
