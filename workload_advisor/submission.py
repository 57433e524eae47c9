"""Lifecycle of a single workload submission to the scoring service."""
import enum
import logging
from typing import List, Optional, Sequence, Union

from workload_advisor.errors import GatewayError, SubmissionError
from workload_advisor.gateway import RequestGateway
from workload_advisor.schemas import (
    CallType,
    RecommendationResult,
    SimulationRecord,
    WorkloadDescriptor,
)

SubmissionResult = Union[RecommendationResult, List[SimulationRecord]]


class SubmissionState(enum.Enum):
    AWAITING_METRICS = "awaiting_metrics"
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class Submission:
    """One attempt to score a workload against one candidate endpoint.

    A submission moves Idle -> Submitting -> Success or Failed exactly once.
    A failed submission may hand the identical descriptor on to the next
    candidate endpoint through fallback(), which is only ever called by the
    user. Nothing is retried automatically.
    """

    def __init__(
        self,
        gateway: RequestGateway,
        descriptor: WorkloadDescriptor,
        call_type: CallType,
        endpoints: Sequence[str],
        attempt: int = 0,
    ) -> None:
        """Store the submission inputs.

        Args:
            gateway (RequestGateway): gateway used to make the call
            descriptor (WorkloadDescriptor): workload to submit
            call_type (CallType): recommend or simulate
            endpoints (Sequence[str]): candidate endpoints, in the order they may be tried
            attempt (int): index of the endpoint this submission targets
        """
        if not endpoints:
            raise ValueError("at least one candidate endpoint is required")
        self.gateway = gateway
        self.descriptor = descriptor
        self.call_type = call_type
        self.endpoints = list(endpoints)
        self.attempt = attempt
        self.result: Optional[SubmissionResult] = None
        self.error: Optional[GatewayError] = None
        if call_type == CallType.RECOMMEND and descriptor.awaiting_metrics:
            self.state = SubmissionState.AWAITING_METRICS
        else:
            self.state = SubmissionState.IDLE

    @property
    def endpoint(self) -> str:
        return self.endpoints[self.attempt]

    @property
    def has_fallback(self) -> bool:
        return self.attempt + 1 < len(self.endpoints)

    async def run(self) -> Optional[SubmissionResult]:
        """Submit the workload and record the outcome.

        Returns:
            Optional[SubmissionResult]: the result on success, None if the call
                failed or resource metrics are still missing

        Raises:
            SubmissionError: if the submission has already been started
        """
        if self.state == SubmissionState.AWAITING_METRICS:
            logging.info("Resource metrics not available yet; submission not started.")
            return None
        if self.state != SubmissionState.IDLE:
            raise SubmissionError(f"submission already {self.state.value}")

        self.state = SubmissionState.SUBMITTING
        try:
            if self.call_type == CallType.SIMULATE:
                self.result = await self.gateway.simulate(self.descriptor, self.endpoint)
            else:
                self.result = await self.gateway.recommend(self.descriptor, self.endpoint)
        except GatewayError as e:
            logging.error(f"Submission to {self.endpoint} failed: {e.message}")
            self.error = e
            self.state = SubmissionState.FAILED
            return None

        self.state = SubmissionState.SUCCESS
        return self.result

    def fallback(self) -> "Submission":
        """Start a fresh submission of the same workload to the next candidate endpoint.

        Raises:
            SubmissionError: if this submission has not failed or no candidates remain
        """
        if self.state != SubmissionState.FAILED:
            raise SubmissionError("only a failed submission can fall back")
        if not self.has_fallback:
            raise SubmissionError("no fallback endpoints remain")
        return Submission(
            gateway=self.gateway,
            descriptor=self.descriptor,
            call_type=self.call_type,
            endpoints=self.endpoints,
            attempt=self.attempt + 1,
        )
