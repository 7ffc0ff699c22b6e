"""Root URL prompt shown before every crawl session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.config import DEFAULT_POLL_INTERVAL
from ..recon.targeting import normalize_root_url
from ..session.events import Key, KeyEvent
from .renderer import Renderer
from .terminal import Terminal

PROMPT_TITLE = "Start URL"
INVALID_TITLE = "Start URL (invalid: expected http:// or https:// with a host)"


class PromptOutcome(Enum):
    CONTINUE = "continue"
    SUBMIT = "submit"
    EXIT = "exit"


@dataclass(slots=True)
class UrlPrompt:
    buffer: str = ""
    rejected: bool = False

    @property
    def text(self) -> str:
        return f"Enter URL to crawl (Esc/Ctrl+Q: quit): {self.buffer}"

    @property
    def title(self) -> str:
        return INVALID_TITLE if self.rejected else PROMPT_TITLE

    def handle_key(self, event: KeyEvent) -> tuple[PromptOutcome, Optional[str]]:
        if event.key is Key.ESCAPE or event.is_ctrl("q") or event.is_ctrl("c"):
            return PromptOutcome.EXIT, None

        if event.key is Key.ENTER:
            url = normalize_root_url(self.buffer)
            if url is None:
                self.buffer = ""
                self.rejected = True
                return PromptOutcome.CONTINUE, None
            return PromptOutcome.SUBMIT, url

        if event.key is Key.BACKSPACE:
            self.buffer = self.buffer[:-1]
        elif event.key is Key.CHAR and not event.ctrl and event.char:
            self.buffer += event.char
            self.rejected = False
        return PromptOutcome.CONTINUE, None


def prompt_for_url(
    terminal: Terminal,
    renderer: Renderer,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> Optional[str]:
    """Reads a root URL; returns ``None`` when the user asks to quit."""

    prompt = UrlPrompt()
    while True:
        renderer.draw_prompt(prompt.text, prompt.title)
        event = terminal.poll_event(poll_interval)
        if not isinstance(event, KeyEvent):
            continue
        outcome, url = prompt.handle_key(event)
        if outcome is PromptOutcome.SUBMIT:
            return url
        if outcome is PromptOutcome.EXIT:
            return None
