"""RequestGateway class used to submit workloads to the scoring service."""
import json
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

import httpx
import pydantic

from workload_advisor.errors import (
    InvalidResponseFormat,
    MalformedSuccessResponse,
    NetworkError,
    UpstreamError,
    truncate_details,
)
from workload_advisor.schemas import (
    CallType,
    RecommendationResult,
    SimulationRecord,
    WorkloadDescriptor,
)

ResultModel = TypeVar("ResultModel", bound=pydantic.BaseModel)

REQUEST_NAMES = {
    CallType.RECOMMEND: "optimization",
    CallType.SIMULATE: "simulation",
}


def request_headers(endpoint: str) -> Dict[str, str]:
    """Return the headers for a POST to the given endpoint.

    Remote services are asked for JSON explicitly; relative, same-origin
    paths only declare the request body type.
    """
    headers = {"Content-Type": "application/json"}
    if httpx.URL(endpoint).is_absolute_url:
        headers["Accept"] = "application/json"
    return headers


def classify_response(
    status_code: int, reason_phrase: str, text: str, call_type: CallType
) -> Union[Dict[str, Any], List[Any]]:
    """Classify a scoring service response as a parsed body or a GatewayError.

    Args:
        status_code (int): HTTP status of the response
        reason_phrase (str): HTTP reason phrase matching the status
        text (str): full response body, read as text
        call_type (CallType): kind of call the response answers

    Returns:
        Union[Dict[str, Any], List[Any]]: parsed JSON body, unchanged

    Raises:
        MalformedSuccessResponse: OK status but the body is not JSON or lacks a recommendation
        InvalidResponseFormat: body is not JSON, or a simulate body is not an array
        UpstreamError: non-OK status or an explicit error field in the body
    """
    is_ok = 200 <= status_code < 300

    try:
        data = json.loads(text)
    except ValueError:
        logging.error(f"Failed to parse response as JSON: {text}")
        error_class = MalformedSuccessResponse if is_ok else InvalidResponseFormat
        raise error_class(
            "Invalid JSON response from server",
            details=truncate_details(text),
            status_code=status_code,
        )

    error_field = data.get("error") if isinstance(data, dict) else None
    if not is_ok or error_field:
        logging.error(f"Scoring service response error: {status_code} {text}")
        message = str(error_field) if error_field else f"{status_code} {reason_phrase}"
        details = data.get("details") if isinstance(data, dict) else None
        if details is None:
            details = truncate_details(text)
        elif not isinstance(details, str):
            details = json.dumps(details)
        raise UpstreamError(message, details=details, status_code=status_code)

    if call_type == CallType.SIMULATE:
        if not isinstance(data, list):
            raise InvalidResponseFormat(
                "Invalid response format from API: Expected an array of hardware options",
                details=truncate_details(text),
                status_code=status_code,
            )
    elif not isinstance(data, dict) or not data.get("recommended_instance"):
        raise MalformedSuccessResponse(
            "Invalid response format from API",
            details=truncate_details(text),
            status_code=status_code,
        )

    return data


def _decode(
    model: Type[ResultModel], data: Dict[str, Any], status_code: int
) -> ResultModel:
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise MalformedSuccessResponse(
            "Invalid response format from API",
            details=truncate_details(str(e)),
            status_code=status_code,
        ) from e


class RequestGateway:
    """Forwards workload descriptions to the scoring service and classifies the outcome.

    Each call is a single POST; nothing is retried. Calls share the HTTP
    client but no other state, so recommend and simulate calls may run
    concurrently.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None) -> None:
        """Store the HTTP client, creating one without a timeout if none is given.

        Args:
            http_client (Optional[httpx.AsyncClient]): client used for upstream calls
        """
        self.client = http_client or httpx.AsyncClient(timeout=None)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def forward(
        self, body: Dict[str, Any], endpoint: str, call_type: CallType
    ) -> Union[Dict[str, Any], List[Any]]:
        """POST a JSON body to the endpoint and return the classified response body.

        Args:
            body (Dict[str, Any]): JSON-serializable request body
            endpoint (str): URL (or path relative to the client's base URL) to POST to
            call_type (CallType): kind of call, which selects the response shape check

        Returns:
            Union[Dict[str, Any], List[Any]]: parsed JSON body

        Raises:
            GatewayError: one of its subclasses, describing the failure
        """
        response = await self._post(body, endpoint, call_type)
        return classify_response(
            response.status_code, response.reason_phrase, response.text, call_type
        )

    async def _post(
        self, body: Dict[str, Any], endpoint: str, call_type: CallType
    ) -> httpx.Response:
        logging.info(f"Calling scoring service at: {endpoint}")
        logging.debug(f"Request body: {body}")
        try:
            response = await self.client.post(
                endpoint, content=json.dumps(body), headers=request_headers(endpoint)
            )
        except httpx.RequestError as e:
            logging.error(f"Error calling scoring service at {endpoint}: {e!r}")
            raise NetworkError(
                f"Failed to process {REQUEST_NAMES[call_type]} request",
                details=str(e) or type(e).__name__,
            ) from e

        logging.debug(f"Raw scoring service response: {response.text}")
        return response

    async def recommend(
        self, descriptor: WorkloadDescriptor, endpoint: str
    ) -> RecommendationResult:
        """Request the single best hardware option for a workload."""
        response = await self._post(
            descriptor.to_payload(CallType.RECOMMEND), endpoint, CallType.RECOMMEND
        )
        data = classify_response(
            response.status_code, response.reason_phrase, response.text, CallType.RECOMMEND
        )
        return _decode(RecommendationResult, data, response.status_code)

    async def simulate(
        self, descriptor: WorkloadDescriptor, endpoint: str
    ) -> List[SimulationRecord]:
        """Request side-by-side performance figures for several hardware options."""
        response = await self._post(
            descriptor.to_payload(CallType.SIMULATE), endpoint, CallType.SIMULATE
        )
        data = classify_response(
            response.status_code, response.reason_phrase, response.text, CallType.SIMULATE
        )
        return [_decode(SimulationRecord, record, response.status_code) for record in data]
