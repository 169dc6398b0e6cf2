"""Case-insensitive metric name deduplication"""
import threading
from typing import Dict, Iterable, List
from .naming import sanitize_metric_name, label_signature


class MetricNameRegistry:
    """Assigns stable, collision-free metric names for the life of the process.

    Names that differ only in case share a bucket. The first signature
    (name plus label names) registered in a bucket keeps the bare name; each
    later distinct signature gets a numeric suffix, starting at ``0`` for the
    second signature seen. Buckets only ever grow, so a signature keeps its
    suffix across scrapes.
    """

    def __init__(self):
        self._buckets: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def resolve(self, candidate: str, label_names: Iterable[str]) -> str:
        """Return the final metric name for ``candidate`` under ``label_names``"""
        name = sanitize_metric_name(candidate)
        signature = f"{name}_{label_signature(label_names)}"
        bucket_key = name.lower()

        with self._lock:
            signatures = self._buckets.get(bucket_key)
            if signatures is None:
                self._buckets[bucket_key] = [signature]
                return name

            try:
                position = signatures.index(signature)
            except ValueError:
                position = len(signatures)
                signatures.append(signature)

        if position == 0:
            return name
        return f"{name}{position - 1}"

    def signatures(self, name: str) -> List[str]:
        """Signatures registered in the bucket of ``name``, in registration order"""
        with self._lock:
            return list(self._buckets.get(sanitize_metric_name(name).lower(), []))

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)
