"""Base bean translator"""
import math
from abc import ABC, abstractmethod
from typing import Any, List, Mapping
from metrics.dedup import MetricNameRegistry
from metrics.models import BeanRecord, MetricValue, MetricType
from metrics.naming import TAG_PREFIX

# Attributes that describe the bean itself rather than a metric
RESERVED_ATTRIBUTES = ("name", "modelerType")


def extract_value(raw: Any) -> float:
    """Numeric value of a raw attribute; anything non-numeric reads as 0.0"""
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, float):
        return raw
    if isinstance(raw, int):
        try:
            return float(raw)
        except OverflowError:
            return math.inf if raw > 0 else -math.inf
    return 0.0


def is_metric_attribute(key: str) -> bool:
    """Check if an attribute key carries a metric value"""
    return key not in RESERVED_ATTRIBUTES and not key.startswith(TAG_PREFIX)


class BeanTranslator(ABC):
    """Base class for turning one bean into metric observations"""

    def __init__(self, name_registry: MetricNameRegistry, name: str = "", help_text: str = ""):
        self.name_registry = name_registry
        self._name = name
        self._help_text = help_text

    @abstractmethod
    def translate(self, bean: BeanRecord, module: str = "") -> List[MetricValue]:
        """Translate a bean and return list of MetricValue objects"""
        pass

    @property
    def name(self) -> str:
        """Translator name for identification"""
        return self._name

    @property
    def help_text(self) -> str:
        """Help text describing what this translator does"""
        return self._help_text or f"{self.name} bean translator"

    def metric_attributes(self, attributes: Mapping[str, Any]):
        """Iterate over (key, raw value) pairs that carry metric values"""
        for key, raw in attributes.items():
            if is_metric_attribute(key):
                yield key, raw

    def build_metric(self, candidate: str, labels: Mapping[str, str], raw: Any) -> MetricValue:
        """Resolve the final name for ``candidate`` and wrap the value"""
        metric_name = self.name_registry.resolve(candidate, labels.keys())
        return MetricValue(
            name=metric_name,
            value=extract_value(raw),
            labels=dict(labels),
            help_text=metric_name,
            metric_type=MetricType.COUNTER,
        )
