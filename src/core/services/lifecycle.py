"""Mount lifecycle for the shells.

A `Mount` is one application session (a browser tab that keeps the shells
mounted across client-side navigations). Effects registered on it run at most
once per mount and never on re-render; the scripts they return stay attached
to the mount, so every later render of the same session carries them.

Effect failures are non-fatal: they are logged, forwarded to the `warning`
hook and the render goes on without the failed integration.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable, Iterable

from core.domain.models import ScriptPlacement, ScriptTag


logger = logging.getLogger(__name__)

Effect = Callable[[], Iterable[ScriptTag] | None]


@dataclass
class ShellHooks:
    """Optional callbacks for UI layers (warnings, effect tracing)."""

    warning: Callable[[str], None] | None = None
    effect_ran: Callable[[str], None] | None = None


@dataclass
class Mount:
    """State that survives re-renders within one session."""

    hooks: ShellHooks = field(default_factory=ShellHooks)
    mount_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    scripts: list[ScriptTag] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    render_count: int = 0
    _completed: set[str] = field(default_factory=set)

    def has_run(self, name: str) -> bool:
        return name in self._completed

    def use_effect(self, name: str, effect: Effect) -> bool:
        """Run `effect` once for this mount; returns True only on the first call."""

        if name in self._completed:
            return False
        # Marked before running: a failing effect is not retried on re-render.
        self._completed.add(name)

        try:
            produced = effect()
        except Exception as exc:
            message = f"Effect '{name}' failed on mount {self.mount_id}: {exc}"
            logger.warning(message)
            self.warnings.append(message)
            if self.hooks.warning:
                self.hooks.warning(message)
            return True

        if produced:
            self.scripts.extend(produced)
        logger.debug("Effect '%s' ran on mount %s", name, self.mount_id)
        if self.hooks.effect_ran:
            self.hooks.effect_ran(name)
        return True

    def scripts_at(self, placement: ScriptPlacement) -> list[ScriptTag]:
        return [s for s in self.scripts if s.placement is placement]
