"""BaseService — foundation for stylectl services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides resolved paths, the stylesheet compiler, and plugins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from stylectl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes."""

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    def _dispatch_hook(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook synchronously.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        try:
            hook = getattr(self._workspace.plugin_manager.hook, hook_name)
            hook(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
