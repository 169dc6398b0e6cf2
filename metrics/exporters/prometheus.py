"""Prometheus format exporter"""
import re
from typing import Dict, List
from metrics.models import MetricValue
from logging_config import get_logger


logger = get_logger(__name__)

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

METRIC_NAME_PATTERN = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
LABEL_NAME_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def is_valid_metric(metric: MetricValue) -> bool:
    """Check the metric and label names are legal exposition identifiers"""
    if not METRIC_NAME_PATTERN.match(metric.name):
        return False
    return all(LABEL_NAME_PATTERN.match(label) for label in metric.labels)


class PrometheusExporter:
    """Render metrics in Prometheus text exposition format"""

    def export_metrics(self, metrics: List[MetricValue]) -> str:
        """Convert metrics to Prometheus format, dropping unrenderable ones"""
        valid = []
        for metric in metrics:
            if is_valid_metric(metric):
                valid.append(metric)
            else:
                logger.debug("Dropping metric with invalid name", metric=metric.name,
                             labels=sorted(metric.labels))

        if not valid:
            return ""

        lines = []

        # Group metrics by name to avoid duplicate HELP and TYPE comments
        for metric_name, metric_list in self._group_metrics_by_name(valid).items():
            lines.append(f"# HELP {metric_name} {metric_list[0].help_text}")
            lines.append(f"# TYPE {metric_name} {metric_list[0].metric_type.value}")

            for metric in metric_list:
                lines.append(metric.to_prometheus_line())

        lines.append("")  # Final newline
        return "\n".join(lines)

    def _group_metrics_by_name(self, metrics: List[MetricValue]) -> Dict[str, List[MetricValue]]:
        """Group metrics by name, preserving order"""
        grouped = {}
        for metric in metrics:
            if metric.name not in grouped:
                grouped[metric.name] = []
            grouped[metric.name].append(metric)
        return grouped
