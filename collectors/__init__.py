"""Bean translators and the Hadoop JMX collector"""
from .base import BeanTranslator, extract_value
from .generic import GenericBeanTranslator
from .region_server import RegionServerTranslator, decode_region_key

__all__ = [
    'BeanTranslator',
    'extract_value',
    'GenericBeanTranslator',
    'RegionServerTranslator',
    'decode_region_key'
]
