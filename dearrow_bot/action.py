from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from discord import Embed, File


@dataclass
class BotAction:
    """A reply ready to be handed to `channel.send`."""

    embeds: List[Embed] = field(default_factory=list)
    files: List[File] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)

    def send_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for `Messageable.send`, omitting empty parts."""
        kwargs: Dict[str, Any] = {}
        if self.embeds:
            kwargs["embeds"] = self.embeds
        if self.files:
            kwargs["files"] = self.files
        return kwargs
