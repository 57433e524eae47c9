"""Unit tests for WorkloadForm."""
import pydantic
import pytest
from workload_advisor.flops_estimator import family_estimator
from workload_advisor.schemas import (
    DeploymentMode,
    Framework,
    ResourceMetrics,
    TaskType,
)
from workload_advisor.workload_form import WorkloadForm


# FIXTURES
@pytest.fixture
def form() -> WorkloadForm:
    return WorkloadForm()


@pytest.fixture
def filled_form() -> WorkloadForm:
    return WorkloadForm(
        defaults={
            "model_type": "ResNet50",
            "framework": "pytorch",
            "task_type": "inference",
            "model_size_mb": "98",
            "parameters_millions": "25.6",
            "batch_size": "16",
        }
    )


@pytest.fixture
def sample_metrics() -> ResourceMetrics:
    return ResourceMetrics(
        gpu_utilization=65,
        gpu_memory_usage=42,
        cpu_utilization=28,
        ram_usage=35,
        disk_iops=120,
        network_bandwidth=85,
        avg_latency=45.3,
        throughput=125.7,
    )


# DERIVATION TESTS
def test_defaults(form: WorkloadForm):
    assert form.values["concurrency"] == "1"
    assert form.values["flops_billions"] == ""


def test_params_edit_derives_flops(form: WorkloadForm):
    form.update("model_type", "ResNet50")
    assert form.values["flops_billions"] == ""
    form.update("parameters_millions", "25.6")
    assert form.values["flops_billions"] == "29.44"


def test_model_type_edit_derives_flops(form: WorkloadForm):
    form.update("parameters_millions", "10")
    assert form.values["flops_billions"] == ""
    form.update("model_type", "ViT_Large")
    assert form.values["flops_billions"] == "40.00"
    form.update("model_type", "MobileNetV2")
    assert form.values["flops_billions"] == "2.50"


def test_manual_flops_survives_unrelated_edits(filled_form: WorkloadForm):
    filled_form.update("flops_billions", "123.45")
    filled_form.update("batch_size", "32")
    filled_form.update("framework", "onnx")
    filled_form.update("latency_requirement_ms", "20")
    assert filled_form.values["flops_billions"] == "123.45"


def test_manual_flops_replaced_by_params_edit(filled_form: WorkloadForm):
    filled_form.update("flops_billions", "123.45")
    filled_form.update("parameters_millions", "50")
    assert filled_form.values["flops_billions"] == "57.50"


@pytest.mark.parametrize("params", ["abc", "-5", "nan", "inf"])
def test_invalid_params_not_estimated(filled_form: WorkloadForm, params: str):
    previous = filled_form.values["flops_billions"]
    filled_form.update("parameters_millions", params)
    assert filled_form.values["parameters_millions"] == params
    assert filled_form.values["flops_billions"] == previous


def test_cleared_model_type_keeps_flops(filled_form: WorkloadForm):
    previous = filled_form.values["flops_billions"]
    filled_form.update("model_type", "")
    assert filled_form.values["flops_billions"] == previous


def test_unknown_field(form: WorkloadForm):
    with pytest.raises(KeyError):
        form.update("gpu_count", "4")


def test_family_estimator():
    form = WorkloadForm(estimator=family_estimator)
    form.update("model_type", "BERT_Base")
    form.update("parameters_millions", "110")
    assert form.values["flops_billions"] == "440.00"


# DESCRIPTOR TESTS
def test_to_descriptor(filled_form: WorkloadForm):
    descriptor = filled_form.to_descriptor()
    assert descriptor.model_type == "ResNet50"
    assert descriptor.framework == Framework.PYTORCH
    assert descriptor.task_type == TaskType.INFERENCE
    assert descriptor.model_size_mb == 98.0
    assert descriptor.flops_billions == 29.44
    assert descriptor.batch_size == 16
    assert descriptor.concurrency == 1
    assert descriptor.latency_requirement_ms is None
    assert descriptor.throughput_requirement is None
    assert descriptor.deployment_mode == DeploymentMode.PRE_DEPLOYMENT


def test_to_descriptor_cleared_concurrency(filled_form: WorkloadForm):
    filled_form.update("concurrency", "")
    assert filled_form.to_descriptor().concurrency == 1
    filled_form.update("concurrency", "4")
    assert filled_form.to_descriptor().concurrency == 4


def test_to_descriptor_missing_field(form: WorkloadForm):
    form.update("model_type", "ResNet50")
    with pytest.raises(pydantic.ValidationError):
        form.to_descriptor()


def test_to_descriptor_post_deployment(
    filled_form: WorkloadForm, sample_metrics: ResourceMetrics
):
    filled_form.set_deployment_mode(DeploymentMode.POST_DEPLOYMENT)
    assert filled_form.to_descriptor().awaiting_metrics
    filled_form.set_resource_metrics(sample_metrics)
    descriptor = filled_form.to_descriptor()
    assert not descriptor.awaiting_metrics
    assert descriptor.resource_metrics == sample_metrics


def test_leaving_post_deployment_drops_metrics(
    filled_form: WorkloadForm, sample_metrics: ResourceMetrics
):
    filled_form.set_deployment_mode(DeploymentMode.POST_DEPLOYMENT)
    filled_form.set_resource_metrics(sample_metrics)
    filled_form.set_deployment_mode(DeploymentMode.PRE_DEPLOYMENT)
    descriptor = filled_form.to_descriptor()
    assert descriptor.resource_metrics is None
    assert not descriptor.awaiting_metrics
