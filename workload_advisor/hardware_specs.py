"""Static hardware specifications used when displaying and exporting results."""
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Mapping, Optional


@dataclass(frozen=True)
class HardwareSpec:
    """Display details of a hardware option."""

    full_name: str
    memory: str
    tensor_cores: str
    fp16_performance: str
    fp32_performance: str
    memory_bandwidth: str
    power_consumption: str
    architecture: str
    use_case: str
    strengths: List[str] = field(default_factory=list)
    considerations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


HARDWARE_SPECS = {
    "A100": HardwareSpec(
        full_name="NVIDIA A100 Tensor Core GPU",
        memory="40GB HBM2e",
        tensor_cores="432 Tensor Cores (3rd gen)",
        fp16_performance="312 TFLOPS",
        fp32_performance="19.5 TFLOPS",
        memory_bandwidth="1,555 GB/s",
        power_consumption="400W",
        architecture="Ampere",
        use_case="High-performance training and inference for large models",
        strengths=[
            "Exceptional performance for large models",
            "High memory capacity",
            "Advanced Tensor Cores",
        ],
        considerations=["Higher cost", "High power consumption"],
    ),
    "H100": HardwareSpec(
        full_name="NVIDIA H100 Tensor Core GPU",
        memory="80GB HBM3",
        tensor_cores="528 Tensor Cores (4th gen)",
        fp16_performance="989 TFLOPS",
        fp32_performance="67 TFLOPS",
        memory_bandwidth="3,350 GB/s",
        power_consumption="700W",
        architecture="Hopper",
        use_case="Next-generation AI training and inference",
        strengths=[
            "Cutting-edge performance",
            "Massive memory capacity",
            "Latest architecture",
        ],
        considerations=["Premium pricing", "Very high power consumption"],
    ),
    "A10": HardwareSpec(
        full_name="NVIDIA A10 GPU",
        memory="24GB GDDR6",
        tensor_cores="192 Tensor Cores (3rd gen)",
        fp16_performance="125 TFLOPS",
        fp32_performance="31.2 TFLOPS",
        memory_bandwidth="600 GB/s",
        power_consumption="150W",
        architecture="Ampere",
        use_case="Balanced performance for inference and light training",
        strengths=[
            "Good price-performance ratio",
            "Moderate power consumption",
            "Versatile",
        ],
        considerations=["Lower memory than A100", "Less suitable for very large models"],
    ),
    "A10g": HardwareSpec(
        full_name="NVIDIA A10G GPU",
        memory="24GB GDDR6",
        tensor_cores="192 Tensor Cores (3rd gen)",
        fp16_performance="125 TFLOPS",
        fp32_performance="31.2 TFLOPS",
        memory_bandwidth="600 GB/s",
        power_consumption="300W",
        architecture="Ampere",
        use_case="Cloud-optimized inference and training",
        strengths=[
            "Cloud-optimized design",
            "Good memory capacity",
            "Efficient for inference",
        ],
        considerations=["Higher power than A10", "Cloud-specific optimization"],
    ),
    "T4": HardwareSpec(
        full_name="NVIDIA Tesla T4 GPU",
        memory="16GB GDDR6",
        tensor_cores="320 Tensor Cores (2nd gen)",
        fp16_performance="65 TFLOPS",
        fp32_performance="8.1 TFLOPS",
        memory_bandwidth="300 GB/s",
        power_consumption="70W",
        architecture="Turing",
        use_case="Cost-effective inference for smaller models",
        strengths=[
            "Very low power consumption",
            "Cost-effective",
            "Good for inference",
        ],
        considerations=["Limited memory", "Older architecture", "Lower performance"],
    ),
    "RTX_3070": HardwareSpec(
        full_name="NVIDIA GeForce RTX 3070",
        memory="8GB GDDR6",
        tensor_cores="184 Tensor Cores (2nd gen)",
        fp16_performance="40 TFLOPS",
        fp32_performance="20.3 TFLOPS",
        memory_bandwidth="448 GB/s",
        power_consumption="220W",
        architecture="Ampere",
        use_case="Development and small-scale inference",
        strengths=[
            "Consumer-grade pricing",
            "Good for development",
            "Widely available",
        ],
        considerations=[
            "Limited memory",
            "Not optimized for enterprise",
            "Gaming-focused",
        ],
    ),
    "RTX_A5000": HardwareSpec(
        full_name="NVIDIA RTX A5000",
        memory="24GB GDDR6",
        tensor_cores="256 Tensor Cores (2nd gen)",
        fp16_performance="67 TFLOPS",
        fp32_performance="27.8 TFLOPS",
        memory_bandwidth="768 GB/s",
        power_consumption="230W",
        architecture="Ampere",
        use_case="Professional workstation AI workloads",
        strengths=[
            "Professional drivers",
            "Good memory capacity",
            "Workstation reliability",
        ],
        considerations=[
            "Higher cost than consumer GPUs",
            "Lower performance than datacenter GPUs",
        ],
    ),
    "CPU": HardwareSpec(
        full_name="CPU-only Processing",
        memory="System RAM dependent",
        tensor_cores="N/A",
        fp16_performance="Varies by CPU",
        fp32_performance="Varies by CPU",
        memory_bandwidth="System dependent",
        power_consumption="65-280W",
        architecture="x86/ARM",
        use_case="Small models, development, or GPU-unavailable scenarios",
        strengths=[
            "No GPU required",
            "Lower cost",
            "High memory capacity potential",
        ],
        considerations=[
            "Much slower inference",
            "No tensor acceleration",
            "Limited parallelism",
        ],
    ),
}


def get_hardware_spec(
    hardware_id: str, specs: Mapping[str, HardwareSpec] = HARDWARE_SPECS
) -> Optional[HardwareSpec]:
    """Return the spec for a hardware ID, or None if it is not in the table."""
    return specs.get(hardware_id)
