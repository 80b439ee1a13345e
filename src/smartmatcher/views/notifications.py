"""Toast-style notifications printed to the console."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

logger = logging.getLogger(__name__)


class ToastVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass
class Toast:
    title: str
    description: str
    variant: ToastVariant = ToastVariant.DEFAULT
    created_at: datetime = field(default_factory=datetime.now)


class Notifier:
    """Shows toasts without blocking and keeps a history of them."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)
        self.history: List[Toast] = []

    def notify(
        self,
        title: str,
        description: str,
        variant: ToastVariant = ToastVariant.DEFAULT,
    ) -> Toast:
        toast = Toast(title=title, description=description, variant=variant)
        self.history.append(toast)
        style = "red" if variant == ToastVariant.DESTRUCTIVE else "green"
        self.console.print(
            Panel(
                Text(description),
                title=f"[bold]{escape(title)}[/bold]",
                border_style=style,
                expand=False,
            )
        )
        return toast

    def success(self, description: str, title: str = "Success") -> Toast:
        return self.notify(title, description)

    def error(self, description: str, title: str = "Error") -> Toast:
        logger.debug(f"Error toast: {description}")
        return self.notify(title, description, ToastVariant.DESTRUCTIVE)

    @property
    def errors(self) -> List[Toast]:
        return [t for t in self.history if t.variant == ToastVariant.DESTRUCTIVE]
