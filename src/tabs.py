"""Tab controller showing one content panel at a time."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

logger = logging.getLogger(__name__)

DEFAULT_TAB_CLASS = "default-sp-tab"
DISPLAY_HIDDEN = "none"
DISPLAY_SHOWN = "flex"
FONT_WEIGHT_NORMAL = 400
FONT_WEIGHT_ACTIVE = 800


@dataclass
class TabElement:
    """A header or content element of a tab container.

    Attributes:
        classes: Class names on the element
        style: Inline style properties ("display", "font-weight")
        on_click: Click handler, set by the TabController for headers
    """

    classes: list[str] = field(default_factory=list)
    style: dict[str, object] = field(default_factory=dict)
    on_click: Callable[[], None] | None = None

    @property
    def hidden(self) -> bool:
        return self.style.get("display") == DISPLAY_HIDDEN

    def click(self) -> None:
        if self.on_click is not None:
            self.on_click()


@dataclass
class TabContainer:
    """A header group and a content group with one content element per header."""

    headers: list[TabElement]
    contents: list[TabElement]

    def __post_init__(self) -> None:
        if len(self.headers) != len(self.contents):
            raise ValueError(
                f"Tab container has {len(self.headers)} headers "
                f"but {len(self.contents)} content panels"
            )

    def __len__(self) -> int:
        return len(self.headers)


class TabController:
    """Shows exactly one content panel of a tab container.

    On construction every panel is hidden, click handlers are bound to the
    headers and the default tab is selected: the first header carrying the
    ``default-sp-tab`` class, or the first tab.

    Attributes:
        container: The tab container being controlled
        active_index: Index of the visible panel, -1 before any selection
    """

    def __init__(self, container: TabContainer) -> None:
        self.container = container
        self.active_index = -1

        for content in container.contents:
            content.style["display"] = DISPLAY_HIDDEN

        for index, header in enumerate(container.headers):
            header.on_click = partial(self.select, index)

        if len(container):
            self.select(self.default_index())

    def default_index(self) -> int:
        for index, header in enumerate(self.container.headers):
            if DEFAULT_TAB_CLASS in header.classes:
                return index
        return 0

    def select(self, index: int) -> None:
        """Show panel ``index`` and hide the previously active one.

        Selecting the active tab again reapplies the same state.

        Raises:
            IndexError: If ``index`` is out of range
        """
        if not 0 <= index < len(self.container):
            raise IndexError(
                f"Tab index {index} out of range for {len(self.container)} tabs"
            )

        headers = self.container.headers
        contents = self.container.contents

        if self.active_index > -1:
            headers[self.active_index].style["font-weight"] = FONT_WEIGHT_NORMAL
            contents[self.active_index].style["display"] = DISPLAY_HIDDEN

        headers[index].style["font-weight"] = FONT_WEIGHT_ACTIVE
        contents[index].style["display"] = DISPLAY_SHOWN
        self.active_index = index

        logger.debug(f"Selected tab {index}")

    def click(self, index: int) -> None:
        """Simulate a click on header ``index``."""
        self.container.headers[index].click()

    def visible_indices(self) -> list[int]:
        return [i for i, c in enumerate(self.container.contents) if not c.hidden]
