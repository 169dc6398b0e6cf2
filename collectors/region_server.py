"""HBase region server translator

Region server beans (``sub=Regions``, ``sub=Tables``, ``sub=TableLatencies``)
encode the table of each metric inside the attribute key itself::

    Namespace_default_table_usertable_region_5f3a..._metric_readRequestCount

The tokens after the first three, up to the standalone ``region`` token, are
the table name; the tokens between ``region`` and ``metric`` are the table
id; everything after ``_metric_`` is the metric name.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List
from metrics.models import BeanRecord, MetricValue
from metrics.naming import derive_prefix_and_labels
from .base import BeanTranslator


METRIC_MARKER = "_metric_"
REGION_TOKEN = "region"
METRIC_TOKEN = "metric"
TABLE_NAME_START = 3

# Beans whose attribute keys carry the region encoding
DEFAULT_REGION_SERVER_BEANS = (
    "Hadoop:service=HBase,name=RegionServer,sub=Regions",
    "Hadoop:service=HBase,name=RegionServer,sub=Tables",
    "Hadoop:service=HBase,name=RegionServer,sub=TableLatencies",
)

TABLE_NAME_LABEL = "tableName"
TABLE_ID_LABEL = "tableId"


class DecoderState(Enum):
    """Position of the scanner within an encoded key"""
    SCANNING = "scanning"
    IN_TABLE_NAME = "in_table_name"
    IN_TABLE_ID = "in_table_id"
    DONE = "done"


@dataclass
class DecodedKey:
    """Result of decoding one region-encoded attribute key"""
    metric_name: str
    labels: Dict[str, str] = field(default_factory=dict)
    state: DecoderState = DecoderState.SCANNING


def is_region_encoded(key: str) -> bool:
    return METRIC_MARKER in key


def decode_region_key(key: str) -> DecodedKey:
    """Recover table labels and the metric name from an encoded key.

    A ``metric`` token seen before any ``region`` token ends the scan with
    no labels. Scanning stops at the first ``metric`` token after ``region``.
    """
    marker_index = key.find(METRIC_MARKER)
    decoded = DecodedKey(metric_name=key[marker_index + len(METRIC_MARKER):])

    tokens = key.split("_")
    region_index = -1
    for index, token in enumerate(tokens):
        if decoded.state is DecoderState.SCANNING and index >= TABLE_NAME_START:
            decoded.state = DecoderState.IN_TABLE_NAME

        if decoded.state in (DecoderState.SCANNING, DecoderState.IN_TABLE_NAME):
            if token == REGION_TOKEN:
                decoded.labels[TABLE_NAME_LABEL] = "_".join(tokens[TABLE_NAME_START:index])
                region_index = index
                decoded.state = DecoderState.IN_TABLE_ID
            elif token == METRIC_TOKEN:
                decoded.state = DecoderState.DONE
        elif decoded.state is DecoderState.IN_TABLE_ID:
            if token == METRIC_TOKEN:
                decoded.labels[TABLE_ID_LABEL] = "_".join(tokens[region_index + 1:index])
                decoded.state = DecoderState.DONE

        if decoded.state is DecoderState.DONE:
            break

    return decoded


class RegionServerTranslator(BeanTranslator):
    """Emits one observation per region-encoded attribute, labelled by table"""

    def __init__(self, name_registry):
        super().__init__(name_registry, "region_server", "HBase region server per-table metrics")

    def translate(self, bean: BeanRecord, module: str = "") -> List[MetricValue]:
        prefix, labels = derive_prefix_and_labels(bean.identity, bean.attributes, module)
        metrics = []
        for key, raw in self.metric_attributes(bean.attributes):
            if not is_region_encoded(key):
                continue
            decoded = decode_region_key(key)
            # Keys without a region token (sub=Tables) decode with no table
            # labels, so every table in the bean yields the same series.
            # Table labels belong to this attribute only
            attribute_labels = dict(labels)
            attribute_labels.update(decoded.labels)
            metrics.append(self.build_metric(f"{prefix}_{decoded.metric_name}", attribute_labels, raw))
        return metrics
