"""Unit tests for the offline mock recommender."""
import pytest
from workload_advisor.mock_service import mock_recommendation
from workload_advisor.schemas import RecommendationResult


def metrics(gpu_utilization: float, gpu_memory_usage: float) -> dict:
    return {
        "gpu_utilization": gpu_utilization,
        "gpu_memory_usage": gpu_memory_usage,
        "cpu_utilization": 28,
        "ram_usage": 35,
        "disk_iops": 120,
        "network_bandwidth": 85,
        "avg_latency": 45.3,
        "throughput": 125.7,
    }


def test_pre_deployment():
    response = mock_recommendation({"is_post_deployment": False})
    assert response["recommended_instance"] == "H100"
    assert response["expected_inference_time_ms"] == 0.88
    assert response["cost_per_1000_inferences"] == 0.001


@pytest.mark.parametrize(
    "resource_metrics,expected",
    [
        (metrics(40, 80), "A10g"),
        (metrics(85, 80), "A100"),
        (metrics(85, 20), "A100"),
        (metrics(65, 42), "A10"),
        (metrics(50, 80), "A10"),
        (None, "A10"),
    ],
)
def test_post_deployment(resource_metrics, expected: str):
    body = {"is_post_deployment": True}
    if resource_metrics is not None:
        body["resource_metrics"] = resource_metrics
    response = mock_recommendation(body)
    assert response["recommended_instance"] == expected


def test_responses_decode():
    for body in (
        {},
        {"is_post_deployment": True},
        {"is_post_deployment": True, "resource_metrics": metrics(40, 80)},
        {"is_post_deployment": True, "resource_metrics": metrics(90, 10)},
    ):
        result = RecommendationResult.model_validate(mock_recommendation(body))
        assert result.alternatives
        assert result.alternatives[0].hardware == result.recommended_instance


def test_constraint_flags():
    response = mock_recommendation(
        {"is_post_deployment": True, "resource_metrics": metrics(40, 80)}
    )
    flagged = [a["hardware"] for a in response["alternatives"] if a["violates_latency"]]
    assert flagged == ["T4"]
