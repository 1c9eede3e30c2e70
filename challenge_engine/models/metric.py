from pydantic import BaseModel
from typing import Dict, List, Union
from enum import Enum

class MetricType(str, Enum):
    STEPS = "steps"
    CALORIES = "calories"
    SLP = "slp"
    DISTANCE = "distance"
    SWIMMING = "swimming"
    CYCLING = "cycling"
    RUNNING = "running"

class MetricConfig(BaseModel):
    type: MetricType
    display_name: str
    unit: str
    unit_plural: str
    emoji: str
    decimals: int = 0  # Fixed decimals for display, 0 means grouped whole numbers

    model_config = {"frozen": True}


METRIC_CONFIGS: Dict[MetricType, MetricConfig] = {
    MetricType.STEPS: MetricConfig(
        type=MetricType.STEPS, display_name="Steps", unit="step", unit_plural="steps", emoji="🚶"
    ),
    MetricType.CALORIES: MetricConfig(
        type=MetricType.CALORIES, display_name="Calories", unit="kcal", unit_plural="kcal", emoji="🔥"
    ),
    MetricType.SLP: MetricConfig(
        type=MetricType.SLP, display_name="SLP", unit="SLP", unit_plural="SLP", emoji="⚡"
    ),
    MetricType.DISTANCE: MetricConfig(
        type=MetricType.DISTANCE, display_name="Distance", unit="km", unit_plural="km", emoji="📍", decimals=1
    ),
    MetricType.SWIMMING: MetricConfig(
        type=MetricType.SWIMMING, display_name="Swimming", unit="lap", unit_plural="laps", emoji="🏊"
    ),
    MetricType.CYCLING: MetricConfig(
        type=MetricType.CYCLING, display_name="Cycling", unit="km", unit_plural="km", emoji="🚴", decimals=1
    ),
    MetricType.RUNNING: MetricConfig(
        type=MetricType.RUNNING, display_name="Running", unit="km", unit_plural="km", emoji="🏃", decimals=1
    ),
}

VALID_METRIC_TYPES: List[str] = [metric.value for metric in MetricType]


def get_metric_config(metric_type: Union[MetricType, str]) -> MetricConfig:
    # Unknown metrics fall back to steps
    try:
        return METRIC_CONFIGS[MetricType(metric_type)]
    except ValueError:
        return METRIC_CONFIGS[MetricType.STEPS]


def format_number(value: float) -> str:
    """Group thousands, dropping a trailing .0 on whole numbers."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{round(value, 2):,}"


def format_metric_value(value: float, metric_type: Union[MetricType, str]) -> str:
    config = get_metric_config(metric_type)
    if config.decimals:
        return f"{value:.{config.decimals}f}"
    return format_number(value)


def format_with_unit(value: float, metric_type: Union[MetricType, str]) -> str:
    """formatWithUnit(12345, "steps") -> "12,345 steps"."""
    config = get_metric_config(metric_type)
    unit = config.unit if value == 1 else config.unit_plural
    return f"{format_metric_value(value, metric_type)} {unit}"


def get_metric_emoji(metric_type: Union[MetricType, str]) -> str:
    return get_metric_config(metric_type).emoji
