# amb Runtime Components
"""
Runtime modules for compiled searches:
- enumerator: the Search factory and the lazy Enumerator it produces
- config: run configuration loaded from amb.json
"""

from .enumerator import NOTHING, Enumerator, Search, Stage
from .config import RunConfig, load_run_config

__all__ = [
    'NOTHING',
    'Enumerator',
    'Search',
    'Stage',
    'RunConfig',
    'load_run_config',
]
