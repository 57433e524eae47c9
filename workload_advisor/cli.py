"""Command line front end for estimating FLOPs and scoring workloads.

Examples:
    workload-advisor estimate ResNet50 25.6
    workload-advisor recommend --model-type BERT_Base --framework pytorch \
        --task-type inference --model-size-mb 420 --parameters-millions 110 \
        --batch-size 8 --latency-ms 50 --fallback http://localhost:8000/api/mock/optimize
    workload-advisor simulate ... --export csv --output results.csv
    workload-advisor serve --port 8000
"""
import argparse
import asyncio
import logging
import math
import sys
from typing import Callable, List, Optional

import pydantic
import uvicorn

from workload_advisor import config, reports
from workload_advisor.flops_estimator import (
    FlopsEstimator,
    default_estimator,
    family_estimator,
)
from workload_advisor.gateway import RequestGateway
from workload_advisor.schemas import (
    CallType,
    DeploymentMode,
    RecommendationResult,
    ResourceMetrics,
    WorkloadDescriptor,
)
from workload_advisor.submission import Submission, SubmissionState
from workload_advisor.workload_form import WorkloadForm


def ask_user(prompt: str) -> bool:
    """Ask a yes/no question on the terminal."""
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--model-type", required=True, help="model architecture tag, e.g. ResNet50")
    parser.add_argument("--framework", required=True, choices=["pytorch", "tensorflow", "jax", "onnx"])
    parser.add_argument("--task-type", default="inference", choices=["training", "inference"])
    parser.add_argument("--model-size-mb", required=True, help="model size in megabytes")
    parser.add_argument("--parameters-millions", required=True, help="parameter count in millions")
    parser.add_argument("--flops-billions", help="FLOPs in billions (estimated when omitted)")
    parser.add_argument("--batch-size", required=True)
    parser.add_argument("--latency-ms", help="maximum acceptable latency in milliseconds")
    parser.add_argument("--throughput", help="required throughput in queries per second")
    parser.add_argument("--concurrency", default="1")
    parser.add_argument("--post-deployment", action="store_true", help="optimize a running deployment")
    parser.add_argument("--metrics", help="JSON file holding the deployment's resource metrics")
    parser.add_argument("--endpoint", help="scoring service endpoint to call first")
    parser.add_argument(
        "--fallback",
        action="append",
        default=[],
        help="endpoint offered if the previous one fails (repeatable)",
    )
    parser.add_argument("--export", choices=reports.EXPORT_FORMATS, help="export results in this format")
    parser.add_argument("-o", "--output", help="file to write the export to (default: stdout)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "workload-advisor", description="hardware recommendations for ML workloads"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests and responses")
    subparsers = parser.add_subparsers(dest="command", required=True)

    estimate_parser = subparsers.add_parser("estimate", help="estimate FLOPs for a model")
    estimate_parser.add_argument("model_type", type=str)
    estimate_parser.add_argument("parameters_millions", type=float)
    estimate_parser.add_argument(
        "--family", action="store_true", help="use the model family catalog"
    )

    recommend_parser = subparsers.add_parser("recommend", help="get a hardware recommendation")
    add_workload_arguments(recommend_parser)

    simulate_parser = subparsers.add_parser("simulate", help="compare hardware options")
    add_workload_arguments(simulate_parser)

    serve_parser = subparsers.add_parser("serve", help="run the advisor API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    return parser


def build_descriptor(args: argparse.Namespace, estimator: FlopsEstimator) -> WorkloadDescriptor:
    """Fill a workload form from the command line arguments and freeze it."""
    form = WorkloadForm(estimator=estimator)
    form.update("model_type", args.model_type)
    form.update("framework", args.framework)
    form.update("task_type", args.task_type)
    form.update("model_size_mb", args.model_size_mb)
    form.update("parameters_millions", args.parameters_millions)
    if args.flops_billions:
        form.update("flops_billions", args.flops_billions)
    form.update("batch_size", args.batch_size)
    form.update("latency_requirement_ms", args.latency_ms or "")
    form.update("throughput_requirement", args.throughput or "")
    form.update("concurrency", args.concurrency)
    if args.post_deployment:
        form.set_deployment_mode(DeploymentMode.POST_DEPLOYMENT)
        if args.metrics:
            with open(args.metrics, "r") as metrics_file:
                form.set_resource_metrics(
                    ResourceMetrics.model_validate_json(metrics_file.read())
                )
    return form.to_descriptor()


async def run_submission(
    submission: Submission, confirm: Callable[[str], bool] = ask_user
) -> Optional[Submission]:
    """Run a submission, offering each fallback endpoint to the user after a failure.

    Returns:
        Optional[Submission]: the successful submission, or None if every attempt
            the user agreed to failed
    """
    while True:
        await submission.run()
        if submission.state == SubmissionState.SUCCESS:
            return submission
        if submission.state == SubmissionState.AWAITING_METRICS:
            print("Resource metrics are required post-deployment; pass --metrics.", file=sys.stderr)
            return None

        error = submission.error
        print(f"Error: {error.message}", file=sys.stderr)
        if error.details:
            print(error.details, file=sys.stderr)
        if not submission.has_fallback:
            return None
        next_endpoint = submission.endpoints[submission.attempt + 1]
        if not confirm(f"Try {next_endpoint} instead?"):
            return None
        submission = submission.fallback()


def print_recommendation(result: RecommendationResult) -> None:
    print(f"Recommended instance: {result.recommended_instance}")
    print(f"Expected inference time: {result.expected_inference_time_ms:.2f} ms")
    print(f"Cost per 1000 inferences: ${result.cost_per_1000_inferences:.4f}")
    if result.peak_memory_usage_gb is not None:
        print(f"Peak memory usage: {result.peak_memory_usage_gb:.2f} GB")
    if result.explanation:
        print(result.explanation)
    for option in result.alternatives or []:
        flags = []
        if option.violates_latency:
            flags.append("violates latency")
        if option.violates_throughput:
            flags.append("violates throughput")
        suffix = f" ({', '.join(flags)})" if flags else ""
        print(
            f"  {option.hardware}: {option.inference_time_ms:.2f} ms, "
            f"${option.cost_per_1000:.4f}/1000{suffix}"
        )


def print_simulation(records) -> None:
    for record in records:
        print(
            f"{record.hardware}: {record.latency_ms:.2f} ms, "
            f"{record.throughput_qps:.2f} QPS, ${record.cost_per_1000:.4f}/1000, "
            f"{record.memory_gb:.1f} GB"
        )


def write_output(text: str, path: Optional[str]) -> None:
    if path:
        with open(path, "w", newline="") as output_file:
            output_file.write(text)
        logging.info(f"Report written to {path}")
    else:
        sys.stdout.write(text)


async def score_workload(
    args: argparse.Namespace,
    call_type: CallType,
    confirm: Callable[[str], bool] = ask_user,
) -> int:
    estimator = family_estimator if call_type == CallType.RECOMMEND else default_estimator
    try:
        descriptor = build_descriptor(args, estimator)
    except pydantic.ValidationError as e:
        print(f"Invalid workload: {e}", file=sys.stderr)
        return 2

    if call_type == CallType.RECOMMEND:
        endpoint = args.endpoint or config.optimize_url()
    else:
        endpoint = args.endpoint or config.SIMULATION_SERVICE_URL
    gateway = RequestGateway()
    try:
        submission = await run_submission(
            Submission(gateway, descriptor, call_type, [endpoint] + args.fallback),
            confirm=confirm,
        )
    finally:
        await gateway.aclose()
    if submission is None:
        return 1

    if args.export:
        if call_type == CallType.RECOMMEND:
            text = reports.export_recommendation(args.export, descriptor, submission.result)
        else:
            text = reports.export_simulation(args.export, descriptor, submission.result)
        write_output(text, args.output)
    elif call_type == CallType.RECOMMEND:
        print_recommendation(submission.result)
    else:
        print_simulation(submission.result)
    return 0


def main(argv: Optional[List[str]] = None, confirm: Callable[[str], bool] = ask_user) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command == "estimate":
        if not math.isfinite(args.parameters_millions) or args.parameters_millions < 0:
            parser.error("parameters_millions must be a non-negative number")
        estimator = family_estimator if args.family else default_estimator
        print(estimator.estimate(args.model_type, args.parameters_millions))
        return 0
    elif args.command == "serve":
        uvicorn.run("workload_advisor.main:app", host=args.host, port=args.port)
        return 0
    elif args.command == "recommend":
        return asyncio.run(score_workload(args, CallType.RECOMMEND, confirm))
    else:
        return asyncio.run(score_workload(args, CallType.SIMULATE, confirm))


if __name__ == "__main__":
    sys.exit(main())
