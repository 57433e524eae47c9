"""Pydantic models for workload descriptions and scoring service responses."""
import enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CallType(str, enum.Enum):
    RECOMMEND = "recommend"
    SIMULATE = "simulate"


class Framework(str, enum.Enum):
    PYTORCH = "pytorch"
    TENSORFLOW = "tensorflow"
    JAX = "jax"
    ONNX = "onnx"


class TaskType(str, enum.Enum):
    TRAINING = "training"
    INFERENCE = "inference"


class DeploymentMode(str, enum.Enum):
    PRE_DEPLOYMENT = "pre-deployment"
    POST_DEPLOYMENT = "post-deployment"


class ResourceMetrics(BaseModel):
    """Utilization readings from a running deployment."""

    model_config = ConfigDict(frozen=True)

    gpu_utilization: float  # percent
    gpu_memory_usage: float  # percent
    cpu_utilization: float  # percent
    ram_usage: float  # percent
    disk_iops: float
    network_bandwidth: float  # MB/s
    avg_latency: float  # ms
    throughput: float  # inferences/s


class WorkloadDescriptor(BaseModel):
    """Immutable description of an ML workload to be scored."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_type: str
    framework: Framework
    task_type: TaskType
    model_size_mb: float = Field(gt=0)
    parameters_millions: float = Field(gt=0)
    flops_billions: float = Field(gt=0)
    batch_size: int = Field(ge=1)
    latency_requirement_ms: Optional[int] = Field(default=None, gt=0)
    throughput_requirement: Optional[int] = Field(default=None, gt=0)
    concurrency: int = Field(default=1, ge=1)
    deployment_mode: DeploymentMode = DeploymentMode.PRE_DEPLOYMENT
    resource_metrics: Optional[ResourceMetrics] = None

    @model_validator(mode="after")
    def check_metrics_mode(self) -> "WorkloadDescriptor":
        if (
            self.resource_metrics is not None
            and self.deployment_mode != DeploymentMode.POST_DEPLOYMENT
        ):
            raise ValueError("resource_metrics can only be attached post-deployment")
        return self

    @property
    def is_post_deployment(self) -> bool:
        return self.deployment_mode == DeploymentMode.POST_DEPLOYMENT

    @property
    def awaiting_metrics(self) -> bool:
        """True when post-deployment metrics are required but not yet available."""
        return self.is_post_deployment and self.resource_metrics is None

    def to_payload(self, call_type: CallType) -> Dict[str, Any]:
        """Construct the request body in the format expected by the scoring service.

        Recommend calls carry the serving constraints, deployment mode and any
        resource metrics. Simulate calls use the shorter requirement keys and
        omit the deployment fields.

        Args:
            call_type (CallType): kind of scoring call the body is for

        Returns:
            Dict[str, Any]: JSON-serializable request body
        """
        payload = {
            "model_type": self.model_type,
            "framework": self.framework.value,
            "task_type": self.task_type.value,
            "model_size_mb": self.model_size_mb,
            "parameters_millions": self.parameters_millions,
            "flops_billions": self.flops_billions,
            "batch_size": self.batch_size,
        }
        if call_type == CallType.SIMULATE:
            payload["latency_req_ms"] = self.latency_requirement_ms
            payload["throughput_req_qps"] = self.throughput_requirement
            return payload

        payload["latency_requirement_ms"] = self.latency_requirement_ms
        payload["throughput_requirement"] = self.throughput_requirement
        payload["concurrency"] = self.concurrency
        payload["is_post_deployment"] = self.is_post_deployment
        if self.is_post_deployment and self.resource_metrics is not None:
            payload["resource_metrics"] = self.resource_metrics.model_dump()
        return payload


class AlternativeOption(BaseModel):
    hardware: str
    inference_time_ms: float
    cost_per_1000: float
    violates_latency: bool = False
    violates_throughput: bool = False


class RecommendationResult(BaseModel):
    recommended_instance: str
    expected_inference_time_ms: float
    cost_per_1000_inferences: float
    explanation: Optional[str] = None
    peak_memory_usage_gb: Optional[float] = None
    alternatives: Optional[List[AlternativeOption]] = None


class SimulationRecord(BaseModel):
    hardware: str
    latency_ms: float
    throughput_qps: float
    cost_per_1000: float
    memory_gb: float


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class FlopsEstimate(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_type: str
    parameters_millions: float
    flops_billions: str
