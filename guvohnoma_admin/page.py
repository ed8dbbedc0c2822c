"""Page document model used by the panel controllers.

A Page wraps one parsed HTML page of the admin panel. Controllers read form
fields from it, render fragments into it and bind handlers to its elements.
Window side effects (navigation, print dialog) are recorded rather than
performed, so the hosting application decides how to carry them out.
"""

import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel

from .utils import parse_html

logger = logging.getLogger(__name__)

Handler = Callable[[], Any]
ConfirmCallback = Callable[[str], bool]


class Navigation(BaseModel):
    """A requested page change, optionally delayed."""

    url: str
    delay: float = 0.0

    model_config = {"frozen": True}


def _classes(tag: Tag) -> list[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def has_class(tag: Tag, name: str) -> bool:
    """Check if a tag carries a CSS class."""
    return name in _classes(tag)


def add_class(tag: Tag, name: str) -> None:
    """Add a CSS class to a tag."""
    classes = _classes(tag)
    if name not in classes:
        classes.append(name)
    tag["class"] = classes


def remove_class(tag: Tag, name: str) -> None:
    """Remove a CSS class from a tag."""
    classes = [c for c in _classes(tag) if c != name]
    if classes:
        tag["class"] = classes
    elif tag.has_attr("class"):
        del tag["class"]


def parse_fragment(html: str) -> list[Tag]:
    """Parse an HTML fragment into top-level tags."""
    fragment = BeautifulSoup(html, "html.parser")
    return [child for child in fragment.contents if isinstance(child, Tag)]


class Page:
    """One loaded admin panel page."""

    def __init__(self, html: str, url: str = "", confirm: ConfirmCallback | None = None):
        """Initialize page.

        Args:
            html: Page HTML
            url: Page URL including the query string (e.g. ``students-edit.html?jshshir=...``)
            confirm: Callback answering confirmation prompts (default: decline everything)
        """
        self.soup = parse_html(html)
        self.url = url
        self._confirm = confirm
        self._handlers: dict[tuple[str, str], list[Handler]] = {}
        self.navigations: list[Navigation] = []
        self.print_requests: list[float] = []

    @classmethod
    def from_file(cls, path: str | Path, url: str | None = None, confirm: ConfirmCallback | None = None) -> "Page":
        """Load a page from an HTML file; the URL defaults to the file name."""
        path = Path(path)
        return cls(path.read_text(encoding="utf-8"), url=url or path.name, confirm=confirm)

    @property
    def path(self) -> str:
        """URL path of the page."""
        return urlparse(self.url).path

    def query_param(self, name: str) -> str | None:
        """Get a query string parameter of the page URL."""
        values = parse_qs(urlparse(self.url).query).get(name)
        return values[0] if values else None

    # Elements

    def element(self, element_id: str) -> Tag | None:
        """Find an element by id."""
        return self.soup.find(id=element_id)

    def has_element(self, element_id: str) -> bool:
        return self.element(element_id) is not None

    @property
    def body(self) -> Tag:
        return self.soup.body or self.soup

    def text(self, element_id: str) -> str:
        element = self.element(element_id)
        return element.get_text(strip=True) if element is not None else ""

    def set_text(self, element_id: str, text: Any) -> bool:
        """Replace the content of an element with text.

        Returns:
            False if the element does not exist
        """
        element = self.element(element_id)
        if element is None:
            return False
        element.string = str(text)
        return True

    def replace_children(self, element_id: str, children: list[Tag]) -> bool:
        """Replace the content of an element with rendered tags.

        Returns:
            False if the element does not exist
        """
        element = self.element(element_id)
        if element is None:
            return False
        element.clear()
        for child in children:
            element.append(child)
        return True

    def append_to_body(self, fragment: Tag) -> Tag:
        self.body.append(fragment)
        return fragment

    def remove(self, element_id: str) -> bool:
        element = self.element(element_id)
        if element is None:
            return False
        element.decompose()
        return True

    def submit_button(self, form_id: str) -> Tag | None:
        """Find the submit button of a form."""
        form = self.element(form_id)
        if form is None:
            return None
        return form.find("button", attrs={"type": "submit"})

    # Form fields

    def value(self, element_id: str) -> str:
        """Get the current value of a form field (empty if missing)."""
        element = self.element(element_id)
        if element is None:
            return ""

        if element.name == "textarea":
            return element.get_text()

        if element.name == "select":
            option = element.find("option", selected=True) or element.find("option")
            if option is None:
                return ""
            return option.get("value", option.get_text(strip=True))

        return element.get("value", "")

    def set_value(self, element_id: str, value: Any) -> bool:
        """Set the value of a form field.

        Returns:
            False if the field does not exist
        """
        element = self.element(element_id)
        if element is None:
            return False

        value = "" if value is None else str(value)

        if element.name == "textarea":
            element.string = value
        elif element.name == "select":
            for option in element.find_all("option"):
                if option.get("value", option.get_text(strip=True)) == value:
                    option["selected"] = ""
                elif option.has_attr("selected"):
                    del option["selected"]
        else:
            element["value"] = value
        return True

    def is_checked(self, element_id: str) -> bool:
        element = self.element(element_id)
        return element is not None and element.has_attr("checked")

    def set_checked(self, element_id: str, checked: bool = True) -> bool:
        element = self.element(element_id)
        if element is None:
            return False
        if checked:
            element["checked"] = ""
        elif element.has_attr("checked"):
            del element["checked"]
        return True

    def checked_value(self, name: str) -> str | None:
        """Get the value of the checked input in a radio group."""
        for element in self.soup.find_all("input", attrs={"name": name}):
            if element.has_attr("checked"):
                return element.get("value", "on")
        return None

    def check_radio(self, name: str, value: Any) -> bool:
        """Check the radio button with the given value in a group.

        Returns:
            False if no radio button in the group has that value
        """
        found = False
        for element in self.soup.find_all("input", attrs={"name": name}):
            if element.get("value") == str(value):
                element["checked"] = ""
                found = True
            elif element.has_attr("checked"):
                del element["checked"]
        return found

    # Events

    def bind(self, element_id: str, event: str, handler: Handler) -> None:
        """Bind a handler to an element event (e.g. a form ``submit``)."""
        self._handlers.setdefault((element_id, event), []).append(handler)

    def is_bound(self, element_id: str, event: str) -> bool:
        return bool(self._handlers.get((element_id, event)))

    async def dispatch(self, element_id: str, event: str) -> list[Any]:
        """Run the handlers bound to an element event.

        Returns:
            Handler results, in binding order
        """
        results = []
        for handler in self._handlers.get((element_id, event), []):
            result = handler()
            if inspect.isawaitable(result):
                result = await result
            results.append(result)
        return results

    # Window

    def confirm(self, message: str) -> bool:
        """Ask the user to confirm an action."""
        if self._confirm is None:
            logger.debug(f"No confirmation handler, declining: {message}")
            return False
        return bool(self._confirm(message))

    def navigate(self, url: str, delay: float = 0.0) -> Navigation:
        """Request navigation to another page after an optional delay."""
        navigation = Navigation(url=url, delay=delay)
        self.navigations.append(navigation)
        logger.debug(f"Navigate to {url} in {delay}s")
        return navigation

    @property
    def last_navigation(self) -> Navigation | None:
        return self.navigations[-1] if self.navigations else None

    def request_print(self, delay: float = 0.0) -> None:
        """Request the print dialog after an optional delay."""
        self.print_requests.append(delay)

    def render(self) -> str:
        """Serialize the current page to HTML."""
        return str(self.soup)
