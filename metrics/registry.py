"""Translator registry mapping bean identities to translators"""
from typing import Dict, Iterable, List, Optional
from collectors.base import BeanTranslator
from collectors.generic import GenericBeanTranslator
from collectors.region_server import RegionServerTranslator, DEFAULT_REGION_SERVER_BEANS
from .dedup import MetricNameRegistry
from logging_config import get_logger


logger = get_logger(__name__)


class TranslatorRegistry:
    """Central registry choosing a translator for each bean identity"""

    def __init__(self, name_registry: MetricNameRegistry, region_server_beans: Optional[Iterable[str]] = None):
        self.name_registry = name_registry
        self.translators: Dict[str, BeanTranslator] = {}
        self.default_translator: BeanTranslator = GenericBeanTranslator(name_registry)

        if region_server_beans is None:
            region_server_beans = DEFAULT_REGION_SERVER_BEANS

        region_translator = RegionServerTranslator(name_registry)
        for identity in region_server_beans:
            self.register_translator(identity, region_translator)

    def register_translator(self, identity: str, translator: BeanTranslator):
        """Register a translator for an exact bean identity"""
        if not isinstance(translator, BeanTranslator):
            raise ValueError("Translator must inherit from BeanTranslator")

        self.translators[identity] = translator
        logger.debug("Registered translator", identity=identity, translator=translator.name)

    def get_translator(self, identity: str) -> BeanTranslator:
        """Translator for ``identity``, falling back to the generic one"""
        return self.translators.get(identity, self.default_translator)

    def list_identities(self) -> List[str]:
        """List all identities with a dedicated translator"""
        return list(self.translators.keys())

    def get_translator_status(self) -> Dict[str, Dict]:
        """Get status information for all registered translators"""
        status = {}

        for identity, translator in self.translators.items():
            status[identity] = {
                "translator": translator.name,
                "class": translator.__class__.__name__,
                "help": translator.help_text
            }

        return status
