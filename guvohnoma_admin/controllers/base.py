"""Base classes and helpers for panel page controllers."""

import itertools
from collections.abc import Iterator
from contextlib import contextmanager

from bs4 import BeautifulSoup, Tag

from ..client import AsyncGuvohnomaClient
from ..notifications import Notifier, PageNotifier
from ..page import Page
from ..rendering import tag

SAVE_BUTTON_HTML = '<i class="bi bi-check-circle me-2"></i>Saqlash'
LOADING_LABEL = "Yuklanmoqda..."
SAVING_LABEL = "Saqlanmoqda..."


class RequestTokens:
    """Monotonic tokens that let a view ignore superseded responses.

    Every load issues a new token for its view; when the response arrives it
    is only applied if no newer load has started for the same view.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest: dict[str, int] = {}

    def issue(self, view: str) -> int:
        token = next(self._counter)
        self._latest[view] = token
        return token

    def is_current(self, view: str, token: int) -> bool:
        return self._latest.get(view) == token


@contextmanager
def busy_button(button: Tag | None, label: str) -> Iterator[None]:
    """Show a spinner in a button and disable it for the duration of the block.

    The original content is restored on every exit path, including errors.
    """
    if button is None:
        yield
        return

    original = button.decode_contents()
    if not button.has_attr("data-original-text"):
        button["data-original-text"] = original

    button.clear()
    button.append(tag("span", class_="spinner-border spinner-border-sm me-2"))
    button.append(label)
    button["disabled"] = ""

    try:
        yield
    finally:
        button.clear()
        restored = BeautifulSoup(original or SAVE_BUTTON_HTML, "html.parser")
        for child in list(restored.contents):
            button.append(child.extract())
        if button.has_attr("disabled"):
            del button["disabled"]


class BaseController:
    """Shared wiring for page controllers."""

    def __init__(
        self,
        client: AsyncGuvohnomaClient,
        page: Page,
        notifier: Notifier | None = None,
        tokens: RequestTokens | None = None,
    ):
        """Initialize controller.

        Args:
            client: Async API client
            page: Page the controller renders into
            notifier: Notification component (default: PageNotifier for the page)
            tokens: Request tokens shared between controllers (default: new set)
        """
        self.client = client
        self.page = page
        self.notifier = notifier if notifier is not None else PageNotifier(page)
        self.tokens = tokens if tokens is not None else RequestTokens()
