"""Editing session for a workload form, owned by the presentation layer."""
import math
from typing import Dict, Optional

from workload_advisor.flops_estimator import FlopsEstimator, default_estimator
from workload_advisor.schemas import (
    DeploymentMode,
    ResourceMetrics,
    WorkloadDescriptor,
)

FIELDS = (
    "model_type",
    "framework",
    "task_type",
    "model_size_mb",
    "parameters_millions",
    "flops_billions",
    "batch_size",
    "latency_requirement_ms",
    "throughput_requirement",
    "concurrency",
)
OPTIONAL_FIELDS = ("latency_requirement_ms", "throughput_requirement")
# Cleared fields that fall back to the descriptor default
DEFAULTED_FIELDS = ("concurrency",)
DERIVATION_TRIGGERS = ("model_type", "parameters_millions")


def _parse_parameter_count(value: str) -> Optional[float]:
    """Return the parameter count if it is a finite, non-negative number."""
    try:
        params = float(value)
    except ValueError:
        return None
    if not math.isfinite(params) or params < 0:
        return None
    return params


class WorkloadForm:
    """Mutable field values of a workload form.

    Values are kept as the raw strings the user typed. The FLOPs field is
    derived from the model type and parameter count whenever either of those
    is edited, which leaves a hand-edited FLOPs value alone until then.
    """

    def __init__(
        self,
        estimator: FlopsEstimator = default_estimator,
        defaults: Optional[Dict[str, str]] = None,
    ) -> None:
        self.estimator = estimator
        self.values = {field: "" for field in FIELDS}
        self.values["concurrency"] = "1"
        self.deployment_mode = DeploymentMode.PRE_DEPLOYMENT
        self.resource_metrics = None
        if defaults:
            for field, value in defaults.items():
                self.update(field, value)

    def update(self, field: str, value: str) -> None:
        """Store an edit to a single field, re-deriving FLOPs when it applies.

        Args:
            field (str): name of the edited field
            value (str): new raw value of the field
        """
        if field not in self.values:
            raise KeyError(f"unknown workload field: {field}")
        self.values[field] = value

        if field not in DERIVATION_TRIGGERS:
            return
        model_type = self.values["model_type"]
        params_value = self.values["parameters_millions"]
        if not model_type or not params_value:
            return
        params = _parse_parameter_count(params_value)
        if params is not None:
            self.values["flops_billions"] = self.estimator.estimate(model_type, params)

    def set_deployment_mode(self, deployment_mode: DeploymentMode) -> None:
        """Switch deployment mode, dropping metrics that only apply post-deployment."""
        self.deployment_mode = deployment_mode
        if deployment_mode != DeploymentMode.POST_DEPLOYMENT:
            self.resource_metrics = None

    def set_resource_metrics(self, metrics: ResourceMetrics) -> None:
        self.resource_metrics = metrics

    def to_descriptor(self) -> WorkloadDescriptor:
        """Validate the current values and freeze them into a WorkloadDescriptor.

        Raises:
            pydantic.ValidationError: if a field is missing or malformed
        """
        fields = {
            field: (None if field in OPTIONAL_FIELDS and not value else value)
            for field, value in self.values.items()
            if value or field not in DEFAULTED_FIELDS
        }
        metrics = (
            self.resource_metrics
            if self.deployment_mode == DeploymentMode.POST_DEPLOYMENT
            else None
        )
        return WorkloadDescriptor(
            **fields, deployment_mode=self.deployment_mode, resource_metrics=metrics
        )
