"""Unit tests for the workload advisor API."""
import json

import pytest
from fastapi.testclient import TestClient
from pytest_httpx import HTTPXMock
from workload_advisor.main import app

OPTIMIZE_URL = "https://scoring.test/optimize"
SIMULATE_URL = "https://scoring.test/simulate"


# FIXTURES
@pytest.fixture
def test_app() -> TestClient:
    app.state.optimize_url = OPTIMIZE_URL
    app.state.simulate_url = SIMULATE_URL
    app.state.mock_delay = 0
    yield TestClient(app)


@pytest.fixture
def recommend_body() -> dict:
    return {
        "model_type": "ResNet50",
        "framework": "pytorch",
        "task_type": "inference",
        "model_size_mb": 98.0,
        "parameters_millions": 25.6,
        "flops_billions": 29.44,
        "batch_size": 16,
        "latency_requirement_ms": 20,
        "throughput_requirement": None,
        "concurrency": 1,
        "is_post_deployment": False,
    }


@pytest.fixture
def sample_metrics() -> dict:
    return {
        "gpu_utilization": 65,
        "gpu_memory_usage": 42,
        "cpu_utilization": 28,
        "ram_usage": 35,
        "disk_iops": 120,
        "network_bandwidth": 85,
        "avg_latency": 45.3,
        "throughput": 125.7,
    }


# PROXY TESTS
def test_optimize_forwards_body(
    test_app: TestClient, recommend_body: dict, httpx_mock: HTTPXMock
):
    # Setup
    upstream = {
        "recommended_instance": "H100",
        "expected_inference_time_ms": 0.88,
        "cost_per_1000_inferences": 0.001,
    }
    httpx_mock.add_response(url=OPTIMIZE_URL, method="POST", json=upstream)

    # Test
    response = test_app.post("/api/optimize", json=recommend_body)
    assert response.status_code == 200
    assert response.json() == upstream
    forwarded = httpx_mock.get_request()
    assert json.loads(forwarded.content) == recommend_body
    assert forwarded.headers["Accept"] == "application/json"


def test_optimize_upstream_error_status(
    test_app: TestClient, recommend_body: dict, httpx_mock: HTTPXMock
):
    # Setup
    httpx_mock.add_response(
        url=OPTIMIZE_URL,
        method="POST",
        status_code=422,
        json={"error": "batch_size too large", "details": "max is 1024"},
    )

    # Test
    response = test_app.post("/api/optimize", json=recommend_body)
    assert response.status_code == 422
    assert response.json() == {"error": "batch_size too large", "details": "max is 1024"}


def test_optimize_invalid_json(
    test_app: TestClient, recommend_body: dict, httpx_mock: HTTPXMock
):
    # Setup
    httpx_mock.add_response(url=OPTIMIZE_URL, method="POST", text="<html>tunnel offline</html>")

    # Test
    response = test_app.post("/api/optimize", json=recommend_body)
    assert response.status_code == 500
    assert response.json() == {
        "error": "Invalid JSON response from server",
        "details": "<html>tunnel offline</html>",
    }


def test_simulate_forwards_array(test_app: TestClient, httpx_mock: HTTPXMock):
    # Setup
    upstream = [
        {
            "hardware": "A10",
            "latency_ms": 4.9,
            "throughput_qps": 204.1,
            "cost_per_1000": 0.001,
            "memory_gb": 1.1,
        }
    ]
    httpx_mock.add_response(url=SIMULATE_URL, method="POST", json=upstream)

    # Test
    response = test_app.post("/api/simulate", json={"model_type": "ResNet50"})
    assert response.status_code == 200
    assert response.json() == upstream


def test_simulate_object_response(test_app: TestClient, httpx_mock: HTTPXMock):
    # Setup
    httpx_mock.add_response(url=SIMULATE_URL, method="POST", json={"hardware": "T4"})

    # Test
    response = test_app.post("/api/simulate", json={"model_type": "ResNet50"})
    assert response.status_code == 500
    assert response.json()["error"].startswith("Invalid response format from API")


# MOCK TESTS
def test_mock_pre_deployment(test_app: TestClient, recommend_body: dict):
    response = test_app.post("/api/mock/optimize", json=recommend_body)
    assert response.status_code == 200
    assert response.json()["recommended_instance"] == "H100"
    assert len(response.json()["alternatives"]) == 5


def test_mock_post_deployment(
    test_app: TestClient, recommend_body: dict, sample_metrics: dict
):
    recommend_body["is_post_deployment"] = True
    recommend_body["resource_metrics"] = {**sample_metrics, "gpu_utilization": 90}
    response = test_app.post("/api/mock/optimize", json=recommend_body)
    assert response.status_code == 200
    assert response.json()["recommended_instance"] == "A100"


@pytest.mark.parametrize(
    "resource_metrics",
    ["n/a", [65, 42], {"gpu_utilization": "high", "gpu_memory_usage": 42}],
)
def test_mock_malformed_metrics(
    test_app: TestClient, recommend_body: dict, resource_metrics
):
    recommend_body["is_post_deployment"] = True
    recommend_body["resource_metrics"] = resource_metrics
    response = test_app.post("/api/mock/optimize", json=recommend_body)
    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json()["error"] == "Failed to process mock request"
    assert response.json()["details"]


# ESTIMATE TESTS
def test_estimate_flops(test_app: TestClient):
    response = test_app.get(
        "/api/flops", params={"model_type": "ViT_Base", "parameters_millions": 86}
    )
    assert response.status_code == 200
    assert response.json() == {
        "model_type": "ViT_Base",
        "parameters_millions": 86.0,
        "flops_billions": "172.00",
    }


def test_estimate_flops_negative(test_app: TestClient):
    response = test_app.get(
        "/api/flops", params={"model_type": "ViT_Base", "parameters_millions": -1}
    )
    assert response.status_code == 422


# HARDWARE TESTS
def test_hardware_spec(test_app: TestClient):
    response = test_app.get("/api/hardware/T4")
    assert response.status_code == 200
    assert response.json()["full_name"] == "NVIDIA Tesla T4 GPU"
    assert response.json()["architecture"] == "Turing"


def test_hardware_spec_unknown(test_app: TestClient):
    response = test_app.get("/api/hardware/TPUv9")
    assert response.status_code == 404
