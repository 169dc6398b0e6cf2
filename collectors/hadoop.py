"""Hadoop JMX collector"""
import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List
from metrics.models import BeanRecord, MetricValue
from metrics.naming import HADOOP_PREFIX
from metrics.registry import TranslatorRegistry
from .jmx import JmxClient
from logging_config import get_logger


logger = get_logger(__name__)


class HadoopJmxCollector:
    """Runs one scrape pass against a Hadoop JMX endpoint"""

    def __init__(self, translators: TranslatorRegistry, client: JmxClient, max_workers: int = 4):
        self.translators = translators
        self.client = client
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="jmx_scrape")

    def translate_beans(self, beans: Iterable[BeanRecord], module: str = "") -> List[MetricValue]:
        """Translate Hadoop beans in order, ignoring every other bean"""
        metrics = []
        for bean in beans:
            if not bean.identity.startswith(HADOOP_PREFIX):
                continue
            translator = self.translators.get_translator(bean.identity)
            metrics.extend(translator.translate(bean, module))
        return metrics

    def collect(self, url: str, module: str = "") -> List[MetricValue]:
        """Fetch ``url`` and return its observations"""
        beans = self.client.fetch_beans(url)
        metrics = self.translate_beans(beans, module)
        logger.debug("Translated beans", url=url, beans_count=len(beans), metrics_count=len(metrics))
        return metrics

    async def collect_async(self, url: str, module: str = "") -> List[MetricValue]:
        """Async version of collect method"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self.collect, url, module)

    def cleanup(self):
        """Cleanup resources"""
        self._executor.shutdown(wait=False)
        self.client.close()
