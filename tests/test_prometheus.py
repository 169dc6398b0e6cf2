"""Tests for Prometheus text rendering"""
import re
from unittest.mock import Mock

from collectors.hadoop import HadoopJmxCollector
from collectors.jmx import parse_beans
from metrics.dedup import MetricNameRegistry
from metrics.exporters.prometheus import PrometheusExporter, is_valid_metric
from metrics.models import MetricType, MetricValue
from metrics.registry import TranslatorRegistry


SAMPLE_LINE = re.compile(
    r'^[a-zA-Z_:][a-zA-Z0-9_:]*'
    r'(\{[a-zA-Z_][a-zA-Z0-9_]*="(?:[^"\\]|\\.)*"(,[a-zA-Z_][a-zA-Z0-9_]*="(?:[^"\\]|\\.)*")*\})?'
    r' \S+$'
)

JVM_METRICS_DOCUMENT = {
    "beans": [
        {
            "name": "Hadoop:service=NameNode,name=JvmMetrics",
            "modelerType": "JvmMetrics",
            "tag.Context": "jvm",
            "tag.ProcessName": "NameNode",
            "MemHeapUsedM": 512.5,
            "GcCountPS Scavenge": 4,
            "GcTimeMillisPS Scavenge": 37,
            "GcCountG1 Young Generation": 2,
            "ThreadsRunnable": 12,
        }
    ]
}


class TestPrometheusExporter:
    """Test exposition format output"""

    def setup_method(self):
        """Setup test fixtures"""
        self.exporter = PrometheusExporter()

    def test_empty(self):
        assert self.exporter.export_metrics([]) == ""

    def test_grouped_by_name(self):
        metrics = [
            MetricValue(name="Hadoop_HBase_readRequestCount", value=1.0, labels={"tableName": "a"}),
            MetricValue(name="Hadoop_HBase_numRegions", value=3.0, labels={}),
            MetricValue(name="Hadoop_HBase_readRequestCount", value=2.0, labels={"tableName": "b"}),
        ]

        output = self.exporter.export_metrics(metrics)

        assert output.splitlines() == [
            "# HELP Hadoop_HBase_readRequestCount Hadoop_HBase_readRequestCount",
            "# TYPE Hadoop_HBase_readRequestCount counter",
            'Hadoop_HBase_readRequestCount{tableName="a"} 1.0',
            'Hadoop_HBase_readRequestCount{tableName="b"} 2.0',
            "# HELP Hadoop_HBase_numRegions Hadoop_HBase_numRegions",
            "# TYPE Hadoop_HBase_numRegions counter",
            "Hadoop_HBase_numRegions 3.0",
        ]
        assert output.endswith("\n")

    def test_invalid_names_dropped(self):
        metrics = [
            MetricValue(name="Hadoop_NameNode_GcCountPS Scavenge", value=4.0, labels={}),
            MetricValue(name="Hadoop_NameNode_ok", value=1.0, labels={"bad-label": "x"}),
            MetricValue(name="Hadoop_NameNode_ThreadsRunnable", value=12.0, labels={"Context": "jvm"}),
        ]

        output = self.exporter.export_metrics(metrics)

        assert "Scavenge" not in output
        assert "bad-label" not in output
        assert 'Hadoop_NameNode_ThreadsRunnable{Context="jvm"} 12.0' in output

    def test_only_invalid_names(self):
        metrics = [MetricValue(name="1st metric", value=1.0, labels={})]

        assert self.exporter.export_metrics(metrics) == ""

    def test_jvm_metrics_bean_renders_parseable_text(self):
        """Attribute keys with spaces never reach the output"""
        collector = HadoopJmxCollector(TranslatorRegistry(MetricNameRegistry()), Mock())
        try:
            metrics = collector.translate_beans(parse_beans(JVM_METRICS_DOCUMENT))
        finally:
            collector.cleanup()

        output = self.exporter.export_metrics(metrics)
        samples = [line for line in output.splitlines() if line and not line.startswith("#")]

        assert samples == [
            'Hadoop_NameNode_MemHeapUsedM{Context="jvm",ProcessName="NameNode"} 512.5',
            'Hadoop_NameNode_ThreadsRunnable{Context="jvm",ProcessName="NameNode"} 12.0',
        ]
        assert all(SAMPLE_LINE.match(line) for line in samples)
        for line in output.splitlines():
            if line.startswith("# TYPE") or line.startswith("# HELP"):
                assert re.match(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$", line.split(" ")[2])


class TestMetricValue:
    """Test single sample lines"""

    def test_labels_sorted_and_escaped(self):
        metric = MetricValue(name="m", value=1.0, labels={"b": 'say "hi"\n', "a": "c:\\tmp"})

        assert metric.to_prometheus_line() == 'm{a="c:\\\\tmp",b="say \\"hi\\"\\n"} 1.0'

    def test_special_values(self):
        assert MetricValue(name="m", value=float("inf"), labels={}).to_prometheus_line() == "m +Inf"
        assert MetricValue(name="m", value=float("-inf"), labels={}).to_prometheus_line() == "m -Inf"
        assert MetricValue(name="m", value=float("nan"), labels={}).to_prometheus_line() == "m NaN"

    def test_none_labels(self):
        metric = MetricValue(name="m", value=0.0, labels=None)

        assert metric.labels == {}
        assert metric.help_text == "m"

    def test_name_validity(self):
        assert is_valid_metric(MetricValue(name="Hadoop_DataNode:bytes", value=1.0, labels={"_x1": "v"}))
        assert not is_valid_metric(MetricValue(name="Hadoop_x y", value=1.0, labels={}))
        assert not is_valid_metric(MetricValue(name="Hadoop_x", value=1.0, labels={"a:b": "v"}))

    def test_single_observation_kind(self):
        assert [t.value for t in MetricType] == ["counter"]
