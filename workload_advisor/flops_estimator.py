"""Estimate a model's FLOPs from its architecture and parameter count.

FLOPs ≈ parameters × architecture-specific multiplier. The multipliers are
rough per-architecture compute densities. Tables are plain mappings so a
caller can supply its own.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

DEFAULT_MULTIPLIER = 2.0

# Exact architecture tags, each the midpoint of an observed range
ARCHITECTURE_MULTIPLIERS = {
    # Vision models
    "CNN_Small": 0.5,
    "CNN_Large": 2.0,
    "ResNet18": 0.5,
    "ResNet50": 1.15,
    "ResNet101": 2.0,
    "MobileNetV2": 0.25,
    "MobileNetV3": 0.3,
    "EfficientNet_B0": 0.4,
    "EfficientNet_B4": 1.3,
    "ViT_Small": 1.0,
    "ViT_Base": 2.0,
    "ViT_Large": 4.0,
    "ConvNeXt_Tiny": 1.3,
    "ConvNeXt_Base": 3.0,
    "YOLO_v5s": 0.55,
    "YOLO_v8m": 1.7,
    # NLP models
    "LSTM_Small": 0.5,
    "LSTM_Large": 1.25,
    "GRU_Medium": 0.75,
    "BERT_tiny": 0.3,
    "BERT_base": 1.65,
    "BERT_large": 4.0,
    "RoBERTa_base": 1.8,
    "DistilBERT": 0.95,
    "GPT2_small": 1.9,
    "GPT2_medium": 4.5,
    "GPT2_large": 9.5,
    "T5_small": 1.25,
    "T5_base": 3.25,
    "Transformer_Small": 0.75,
    "Transformer_Base": 1.9,
    "LLaMA_7B": 100,
    "LLaMA_13B": 200,
}

# Model families, matched on the tag prefix (e.g. "CNN" for "CNN_Small")
FAMILY_MULTIPLIERS = {
    "CNN": 2,
    "BERT": 4,
    "ViT": 4,
    "ResNet": 2,
    "EfficientNet": 1.5,
    "MobileNet": 1,
    "DenseNet": 2.5,
    "Inception": 2,
    "GPT2": 6,
    "T5": 5,
    "LSTM": 3,
    "LLM": 6,
}


def format_flops(flops_billions: float) -> str:
    """Format a FLOPs value as fixed point with two decimal places.

    Exact ties round away from zero. The float is converted exactly, so a
    value stored just below a tie (1.005 is 1.00499...) still rounds down.
    """
    return str(Decimal(flops_billions).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class FlopsEstimator:
    """Estimates FLOPs (in billions) from an injected multiplier table."""

    def __init__(
        self,
        multipliers: Mapping[str, float] = ARCHITECTURE_MULTIPLIERS,
        default_multiplier: float = DEFAULT_MULTIPLIER,
        match_family: bool = False,
    ) -> None:
        """Store the multiplier table.

        Args:
            multipliers (Mapping[str, float]): maps architecture tags to multipliers
            default_multiplier (float): multiplier used for tags missing from the table
            match_family (bool): look up the tag's family prefix instead of the full tag
        """
        self.multipliers = multipliers
        self.default_multiplier = default_multiplier
        self.match_family = match_family

    def multiplier(self, model_type: str) -> float:
        """Return the multiplier for an architecture tag, falling back to the default."""
        key = model_type.split("_")[0] if self.match_family else model_type
        return self.multipliers.get(key, self.default_multiplier)

    def estimate(self, model_type: str, parameters_millions: float) -> str:
        """Estimate FLOPs in billions, formatted to two decimal places.

        The parameter count is assumed to be a finite, non-negative number;
        callers validate user input before estimating.
        """
        return format_flops(parameters_millions * self.multiplier(model_type))


default_estimator = FlopsEstimator()
family_estimator = FlopsEstimator(FAMILY_MULTIPLIERS, match_family=True)


def estimate_flops(model_type: str, parameters_millions: float) -> str:
    """Estimate FLOPs using the exact-tag architecture catalog."""
    return default_estimator.estimate(model_type, parameters_millions)
