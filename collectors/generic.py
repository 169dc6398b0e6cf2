"""Generic translator for Hadoop beans"""
from typing import List
from metrics.models import BeanRecord, MetricValue
from metrics.naming import derive_prefix_and_labels
from .base import BeanTranslator


class GenericBeanTranslator(BeanTranslator):
    """Emits one observation per metric attribute of a bean"""

    def __init__(self, name_registry):
        super().__init__(name_registry, "generic", "One metric per bean attribute")

    def translate(self, bean: BeanRecord, module: str = "") -> List[MetricValue]:
        prefix, labels = derive_prefix_and_labels(bean.identity, bean.attributes, module)
        return [
            self.build_metric(f"{prefix}_{key}", labels, raw)
            for key, raw in self.metric_attributes(bean.attributes)
        ]
