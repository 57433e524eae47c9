"""Canned recommendations served when the scoring service is unavailable."""
from typing import Any, Dict, List


def _alternative(
    hardware: str,
    inference_time_ms: float,
    cost_per_1000: float,
    violates_latency: bool = False,
    violates_throughput: bool = False,
) -> Dict[str, Any]:
    return {
        "hardware": hardware,
        "inference_time_ms": inference_time_ms,
        "cost_per_1000": cost_per_1000,
        "violates_latency": violates_latency,
        "violates_throughput": violates_throughput,
    }


def _memory_bound_recommendation() -> Dict[str, Any]:
    return {
        "recommended_instance": "A10g",
        "expected_inference_time_ms": 28.45,
        "cost_per_1000_inferences": 0.0165,
        "explanation": (
            "A10g is recommended based on your current resource metrics. Your current GPU "
            "utilization is low (under 50%) but memory usage is high (over 70%), suggesting "
            "a GPU with more memory but less compute power would be optimal."
        ),
        "alternatives": [
            _alternative("A10g", 28.45, 0.0165),
            _alternative("A100", 18.72, 0.0312),
            _alternative("T4", 42.18, 0.0098, violates_latency=True),
            _alternative("RTX_3070", 35.65, 0.0145),
        ],
    }


def _compute_bound_recommendation() -> Dict[str, Any]:
    return {
        "recommended_instance": "A100",
        "expected_inference_time_ms": 18.72,
        "cost_per_1000_inferences": 0.0312,
        "explanation": (
            "A100 is recommended based on your current resource metrics. Your current GPU "
            "utilization is high (over 80%), suggesting you need a more powerful GPU to "
            "handle the workload efficiently."
        ),
        "alternatives": [
            _alternative("A100", 18.72, 0.0312),
            _alternative("H100", 12.35, 0.0425),
            _alternative("A10g", 28.45, 0.0165, violates_throughput=True),
            _alternative("RTX_A5000", 25.92, 0.0185, violates_throughput=True),
        ],
    }


def _balanced_recommendation() -> Dict[str, Any]:
    return {
        "recommended_instance": "A10",
        "expected_inference_time_ms": 32.18,
        "cost_per_1000_inferences": 0.0187,
        "explanation": (
            "A10 is recommended as a balanced option for your workload based on current "
            "resource utilization patterns."
        ),
        "alternatives": [
            _alternative("A10", 32.18, 0.0187),
            _alternative("A100", 18.72, 0.0312),
            _alternative("T4", 45.32, 0.0098),
            _alternative("RTX_3070", 38.45, 0.0145),
        ],
    }


def _pre_deployment_recommendation() -> Dict[str, Any]:
    alternatives: List[Dict[str, Any]] = [
        _alternative("H100", 0.883, 0.001),
        _alternative("A100", 1.021, 0.001),
        _alternative("A10", 4.886, 0.001),
        _alternative("RTX_3070", 7.968, 0.001),
        _alternative("RTX_A5000", 5.586, 0.002),
    ]
    return {
        "recommended_instance": "H100",
        "expected_inference_time_ms": 0.88,
        "cost_per_1000_inferences": 0.001,
        "explanation": (
            "H100 meets your SLA at $0.00100 per 1000 inferences and latency 0.88 ms. "
            "The next best is A100 at $0.00100 per 1000 inferences and latency 1.02 ms."
        ),
        "alternatives": alternatives,
    }


def mock_recommendation(body: Dict[str, Any]) -> Dict[str, Any]:
    """Return a canned recommendation for a recommend-call request body.

    Post-deployment requests are steered by the reported GPU readings: low
    utilization with high memory pressure favours a memory-rich card, high
    utilization favours a faster one, anything else gets a balanced option.

    Args:
        body (Dict[str, Any]): recommend-call request body

    Returns:
        Dict[str, Any]: response body in the scoring service's format
    """
    if not body.get("is_post_deployment"):
        return _pre_deployment_recommendation()

    metrics = body.get("resource_metrics")
    if metrics:
        gpu_utilization = metrics.get("gpu_utilization", 0)
        memory_usage = metrics.get("gpu_memory_usage", 0)
        if gpu_utilization < 50 and memory_usage > 70:
            return _memory_bound_recommendation()
        elif gpu_utilization > 80:
            return _compute_bound_recommendation()

    return _balanced_recommendation()
