"""Export recommendation and simulation results as JSON, CSV or paginated text."""
import csv
import datetime
import io
import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from workload_advisor.hardware_specs import HARDWARE_SPECS, HardwareSpec
from workload_advisor.schemas import (
    RecommendationResult,
    SimulationRecord,
    WorkloadDescriptor,
)

EXPORT_FORMATS = ("json", "csv", "text")
LINES_PER_PAGE = 60
FOOTER = "Generated by AI Workload Optimizer"

RECOMMENDATION_COLUMNS = [
    "Hardware",
    "Full Name",
    "Inference Time (ms)",
    "Cost per 1000",
    "Violates Latency",
    "Violates Throughput",
    "Architecture",
    "Memory Spec",
]
SIMULATION_COLUMNS = [
    "Hardware",
    "Full Name",
    "Latency (ms)",
    "Throughput (QPS)",
    "Cost per 1000",
    "Memory (GB)",
    "Architecture",
    "Memory Spec",
]


def report_filename(kind: str, fmt: str, date: Optional[datetime.date] = None) -> str:
    """Return the default file name for an exported report, e.g. simulation_report_2024-01-31.csv."""
    date = date or datetime.date.today()
    extension = "txt" if fmt == "text" else fmt
    return f"{kind}_report_{date.isoformat()}.{extension}"


def model_configuration(descriptor: WorkloadDescriptor) -> Dict[str, Any]:
    """Return the workload fields recorded in a report's metadata."""
    return {
        "model_type": descriptor.model_type,
        "framework": descriptor.framework.value,
        "task_type": descriptor.task_type.value,
        "model_size_mb": descriptor.model_size_mb,
        "parameters_millions": descriptor.parameters_millions,
        "flops_billions": descriptor.flops_billions,
        "batch_size": descriptor.batch_size,
        "latency_requirement_ms": descriptor.latency_requirement_ms,
        "throughput_requirement": descriptor.throughput_requirement,
        "concurrency": descriptor.concurrency,
        "deployment_mode": descriptor.deployment_mode.value,
    }


def _spec_dict(hardware: str, specs: Mapping[str, HardwareSpec]) -> Optional[Dict]:
    spec = specs.get(hardware)
    return spec.to_dict() if spec else None


def build_recommendation_report(
    descriptor: WorkloadDescriptor,
    result: RecommendationResult,
    generated_at: Optional[datetime.datetime] = None,
    specs: Mapping[str, HardwareSpec] = HARDWARE_SPECS,
) -> Dict[str, Any]:
    """Assemble the structured report for a recommend call."""
    generated_at = generated_at or datetime.datetime.now()
    return {
        "report_metadata": {
            "generated_at": generated_at.isoformat(),
            "report_type": "Hardware Recommendation Report",
            "model_configuration": model_configuration(descriptor),
        },
        "recommendation": {
            **result.model_dump(exclude={"alternatives"}),
            "specs": _spec_dict(result.recommended_instance, specs),
        },
        "alternatives": [
            {**option.model_dump(), "specs": _spec_dict(option.hardware, specs)}
            for option in result.alternatives or []
        ],
    }


def build_simulation_report(
    descriptor: WorkloadDescriptor,
    records: Sequence[SimulationRecord],
    generated_at: Optional[datetime.datetime] = None,
    specs: Mapping[str, HardwareSpec] = HARDWARE_SPECS,
) -> Dict[str, Any]:
    """Assemble the structured report for a simulate call."""
    generated_at = generated_at or datetime.datetime.now()
    return {
        "report_metadata": {
            "generated_at": generated_at.isoformat(),
            "report_type": "Performance Simulation Report",
            "model_configuration": model_configuration(descriptor),
        },
        "simulation_results": [
            {
                "hardware": record.hardware,
                "specs": _spec_dict(record.hardware, specs),
                "performance": {
                    "latency_ms": record.latency_ms,
                    "throughput_qps": record.throughput_qps,
                    "cost_per_1000": record.cost_per_1000,
                    "memory_gb": record.memory_gb,
                },
            }
            for record in records
        ],
    }


def to_json(report: Dict[str, Any]) -> str:
    return json.dumps(report, indent=2)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def recommendation_to_csv(
    result: RecommendationResult, specs: Mapping[str, HardwareSpec] = HARDWARE_SPECS
) -> str:
    """Flatten a recommendation into one CSV row per hardware option.

    When the service returned no alternatives, the recommended instance is
    written as the only row.
    """
    options = result.alternatives
    if not options:
        options = [
            {
                "hardware": result.recommended_instance,
                "inference_time_ms": result.expected_inference_time_ms,
                "cost_per_1000": result.cost_per_1000_inferences,
                "violates_latency": False,
                "violates_throughput": False,
            }
        ]
    else:
        options = [option.model_dump() for option in options]

    output = io.StringIO()
    csv_writer = csv.writer(output, lineterminator="\n")
    csv_writer.writerow(RECOMMENDATION_COLUMNS)
    for option in options:
        spec = specs.get(option["hardware"])
        csv_writer.writerow(
            [
                option["hardware"],
                spec.full_name if spec else "N/A",
                option["inference_time_ms"],
                option["cost_per_1000"],
                _yes_no(option["violates_latency"]),
                _yes_no(option["violates_throughput"]),
                spec.architecture if spec else "N/A",
                spec.memory if spec else "N/A",
            ]
        )
    return output.getvalue()


def simulation_to_csv(
    records: Sequence[SimulationRecord],
    specs: Mapping[str, HardwareSpec] = HARDWARE_SPECS,
) -> str:
    """Flatten simulation results into one CSV row per hardware option."""
    output = io.StringIO()
    csv_writer = csv.writer(output, lineterminator="\n")
    csv_writer.writerow(SIMULATION_COLUMNS)
    for record in records:
        spec = specs.get(record.hardware)
        csv_writer.writerow(
            [
                record.hardware,
                spec.full_name if spec else "N/A",
                record.latency_ms,
                record.throughput_qps,
                record.cost_per_1000,
                record.memory_gb,
                spec.architecture if spec else "N/A",
                spec.memory if spec else "N/A",
            ]
        )
    return output.getvalue()


def paginate(blocks: Sequence[List[str]], lines_per_page: int = LINES_PER_PAGE) -> str:
    """Lay out blocks of lines on pages, separated by form feeds.

    A block never straddles a page boundary unless it is longer than a page
    on its own. Each page ends with a footer carrying its page number.

    Args:
        blocks (Sequence[List[str]]): groups of lines that should stay together
        lines_per_page (int): body lines available on each page

    Returns:
        str: the paginated report
    """
    pages: List[List[str]] = [[]]
    for block in blocks:
        current = pages[-1]
        if current and len(current) + len(block) > lines_per_page:
            pages.append([])
            current = pages[-1]
        current.extend(block)

    page_count = len(pages)
    rendered = []
    for number, page in enumerate(pages, start=1):
        footer = ["", f"{FOOTER}    Page {number} of {page_count}"]
        rendered.append("\n".join(page + footer))
    return "\n\f".join(rendered) + "\n"


def _configuration_block(configuration: Dict[str, Any]) -> List[str]:
    lines = [
        "MODEL CONFIGURATION",
        f"Model Type: {configuration['model_type']}",
        f"Framework: {configuration['framework']}",
        f"Task Type: {configuration['task_type']}",
        f"Model Size: {configuration['model_size_mb']} MB",
        f"Parameters: {configuration['parameters_millions']} million",
        f"FLOPs: {configuration['flops_billions']} billion",
        f"Batch Size: {configuration['batch_size']}",
    ]
    if configuration["latency_requirement_ms"]:
        lines.append(f"Latency Requirement: {configuration['latency_requirement_ms']} ms")
    if configuration["throughput_requirement"]:
        lines.append(
            f"Throughput Requirement: {configuration['throughput_requirement']} QPS"
        )
    lines.append("")
    return lines


def _header_block(title: str, generated_at: str) -> List[str]:
    return [title, "", f"Generated: {generated_at}", ""]


def recommendation_to_text(
    report: Dict[str, Any], lines_per_page: int = LINES_PER_PAGE
) -> str:
    """Render a recommendation report built by build_recommendation_report as paginated text."""
    metadata = report["report_metadata"]
    recommendation = report["recommendation"]
    blocks = [
        _header_block("HARDWARE RECOMMENDATION REPORT", metadata["generated_at"]),
        _configuration_block(metadata["model_configuration"]),
    ]

    summary = [
        "RECOMMENDATION",
        f"Recommended Instance: {recommendation['recommended_instance']}",
        f"Expected Inference Time: {recommendation['expected_inference_time_ms']:.2f} ms",
        f"Cost Per 1000 Inferences: ${recommendation['cost_per_1000_inferences']:.4f}",
    ]
    if recommendation.get("peak_memory_usage_gb") is not None:
        summary.append(f"Peak Memory Usage: {recommendation['peak_memory_usage_gb']:.2f} GB")
    if recommendation.get("explanation"):
        summary.append(f"Explanation: {recommendation['explanation']}")
    summary.append("")
    blocks.append(summary)

    if report["alternatives"]:
        blocks.append(["ALTERNATIVES"])
    for index, option in enumerate(report["alternatives"], start=1):
        block = [f"{index}. {option['hardware']}"]
        if option["specs"]:
            block.append(f"   {option['specs']['full_name']}")
        block.extend(
            [
                f"   Inference Time: {option['inference_time_ms']:.2f} ms",
                f"   Cost per 1000: ${option['cost_per_1000']:.4f}",
                f"   Violates Latency: {_yes_no(option['violates_latency'])}",
                f"   Violates Throughput: {_yes_no(option['violates_throughput'])}",
                "",
            ]
        )
        blocks.append(block)
    return paginate(blocks, lines_per_page)


def simulation_to_text(
    report: Dict[str, Any], lines_per_page: int = LINES_PER_PAGE
) -> str:
    """Render a simulation report built by build_simulation_report as paginated text."""
    metadata = report["report_metadata"]
    blocks = [
        _header_block("PERFORMANCE SIMULATION REPORT", metadata["generated_at"]),
        _configuration_block(metadata["model_configuration"]),
        ["SIMULATION RESULTS"],
    ]
    for index, entry in enumerate(report["simulation_results"], start=1):
        performance = entry["performance"]
        specs = entry["specs"]
        block = [f"{index}. {entry['hardware']}"]
        if specs:
            block.append(f"   {specs['full_name']}")
        block.extend(
            [
                f"   Latency: {performance['latency_ms']:.2f} ms",
                f"   Throughput: {performance['throughput_qps']:.2f} QPS",
                f"   Cost per 1000: ${performance['cost_per_1000']:.4f}",
                f"   Memory: {performance['memory_gb']:.1f} GB",
            ]
        )
        if specs:
            block.extend(
                [
                    f"   Architecture: {specs['architecture']}",
                    f"   Memory Spec: {specs['memory']}",
                    f"   Use Case: {specs['use_case']}",
                ]
            )
        block.append("")
        blocks.append(block)
    return paginate(blocks, lines_per_page)


def export_recommendation(
    fmt: str, descriptor: WorkloadDescriptor, result: RecommendationResult
) -> str:
    """Render a recommendation in one of EXPORT_FORMATS."""
    if fmt == "csv":
        return recommendation_to_csv(result)
    report = build_recommendation_report(descriptor, result)
    if fmt == "json":
        return to_json(report)
    elif fmt == "text":
        return recommendation_to_text(report)
    raise ValueError(f"unsupported export format: {fmt}")


def export_simulation(
    fmt: str, descriptor: WorkloadDescriptor, records: Sequence[SimulationRecord]
) -> str:
    """Render simulation results in one of EXPORT_FORMATS."""
    if fmt == "csv":
        return simulation_to_csv(records)
    report = build_simulation_report(descriptor, records)
    if fmt == "json":
        return to_json(report)
    elif fmt == "text":
        return simulation_to_text(report)
    raise ValueError(f"unsupported export format: {fmt}")
