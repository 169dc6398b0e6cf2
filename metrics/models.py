"""Metric and bean data models"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping
from enum import Enum


class MetricType(Enum):
    """Prometheus metric types"""
    COUNTER = "counter"


@dataclass(frozen=True)
class BeanRecord:
    """One JMX bean: its identity string and raw attribute map"""
    identity: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, bean: Dict[str, Any]) -> "BeanRecord":
        """Build a record from a decoded ``beans`` array entry"""
        return cls(identity=bean["name"], attributes=dict(bean))


def _escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def _format_value(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return str(value)


@dataclass
class MetricValue:
    """Single observation produced from one bean attribute"""
    name: str
    value: float
    labels: Dict[str, str]
    help_text: str = ""
    metric_type: MetricType = MetricType.COUNTER

    def __post_init__(self):
        # Ensure labels is never None
        if self.labels is None:
            self.labels = {}
        if not self.help_text:
            self.help_text = self.name

    def to_prometheus_line(self) -> str:
        """Convert to Prometheus exposition format"""
        labels_str = ""
        if self.labels:
            label_pairs = [f'{k}="{_escape_label_value(str(v))}"' for k, v in sorted(self.labels.items())]
            labels_str = "{" + ",".join(label_pairs) + "}"

        return f"{self.name}{labels_str} {_format_value(self.value)}"
