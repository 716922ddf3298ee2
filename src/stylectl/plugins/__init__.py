"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins in ``.stylectl/plugins/``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from stylectl.plugins.hookspecs import hookimpl
from stylectl.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
