"""
Utility modules.
"""

from .config import FFTConfig, load_config
from .logging import setup_logging, get_logger

__all__ = ['FFTConfig', 'load_config', 'setup_logging', 'get_logger']
