"""Metric name and label derivation from Hadoop bean identities"""
from typing import Any, Dict, Iterable, Mapping, Tuple
from logging_config import get_logger


logger = get_logger(__name__)

HADOOP_PREFIX = "Hadoop:"
TAG_PREFIX = "tag."

# Characters that are not allowed in metric names and their replacements
_NAME_SUBSTITUTIONS = (
    ("(", ""),
    (")", ""),
    (".", "_"),
    ("-", "_"),
    (":", "_"),
)


def sanitize_metric_name(name: str) -> str:
    """Drop parentheses and map ``.``, ``-`` and ``:`` to underscores"""
    for old, new in _NAME_SUBSTITUTIONS:
        name = name.replace(old, new)
    return name


def label_signature(label_names: Iterable[str]) -> str:
    """Sorted, underscore-joined label names"""
    return "_".join(sorted(label_names))


def _tag_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def derive_prefix_and_labels(identity: str, attributes: Mapping[str, Any],
                             module_override: str = "") -> Tuple[str, Dict[str, str]]:
    """Split a bean identity into a metric prefix and a label set.

    ``Hadoop:service=HBase,name=RegionServer,sub=Server`` yields the prefix
    ``Hadoop_HBase`` and the labels ``{"sub": "Server"}``. Every ``service``
    segment extends the prefix, ``name`` segments are dropped and any other
    segment becomes a label. Attributes named ``tag.<label>`` are then
    applied on top, replacing identity labels of the same name.

    A non-empty ``module_override`` is appended to the prefix.
    """
    labels: Dict[str, str] = {}
    prefix_parts = ["Hadoop"]

    body = identity[len(HADOOP_PREFIX):] if identity.startswith(HADOOP_PREFIX) else identity
    for segment in body.split(","):
        key, sep, value = segment.partition("=")
        if not sep:
            logger.debug("Skipping identity segment without '='", identity=identity, segment=segment)
            continue
        if key == "service":
            prefix_parts.append(value)
        elif key != "name":
            labels[key] = value

    for key, value in attributes.items():
        if key.startswith(TAG_PREFIX):
            labels[key[len(TAG_PREFIX):]] = _tag_value(value)

    prefix = "_".join(prefix_parts)
    if module_override:
        prefix = f"{prefix}_{module_override}"
    return prefix, labels
