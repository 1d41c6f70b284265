"""
Pagination widget for navigating through record pages
"""

from typing import Optional, Sequence

from textual.containers import Container
from textual.message import Message
from textual.widgets import Button, Label, Select


class Pagination(Container):
    """
    Pagination widget with first, prev, next, last buttons and a page-size picker
    """

    DEFAULT_CSS = """
    Pagination {
        layout: horizontal;
        height: 3;
        content-align: center middle;
    }

    Pagination > Button {
        min-width: 5;
        margin: 0 1;
    }

    Pagination > #page-indicator {
        min-width: 22;
        height: 3;
        content-align: center middle;
    }

    Pagination > #page-size {
        width: 16;
    }
    """

    class PageChanged(Message):
        """Page changed message"""
        def __init__(self, page: int) -> None:
            super().__init__()
            self.page = page

    class PageSizeChanged(Message):
        """Rows-per-page changed message"""
        def __init__(self, size: int) -> None:
            super().__init__()
            self.size = size

    def __init__(
        self,
        page_size_options: Sequence[int],
        page_size: int,
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        """
        Initialize the Pagination widget

        Args:
            page_size_options: Allowed rows-per-page values
            page_size: Initially selected rows-per-page
            id: Optional widget ID
            classes: Optional CSS classes
        """
        super().__init__(id=id, classes=classes)
        self._options = tuple(page_size_options)
        self.current_page = 1
        self.total_pages = 1
        self.page_size = page_size

    def compose(self):
        """Create child widgets"""
        yield Button("« First", id="first-page", classes="page-button")
        yield Button("< Prev", id="prev-page", classes="page-button")
        yield Label("Page [b]1[/b] of [b]1[/b]", id="page-indicator", classes="page-indicator")
        yield Button("Next >", id="next-page", classes="page-button")
        yield Button("Last »", id="last-page", classes="page-button")
        yield Select(
            [(f"{size} / page", size) for size in self._options],
            value=self.page_size,
            allow_blank=False,
            id="page-size",
        )

    def update_pages(self, current: int, total: int, page_size: int, busy: bool = False) -> None:
        """
        Update pagination with new page information

        Args:
            current: Current page number
            total: Total pages
            page_size: Rows per page currently shown
            busy: True while a page is being fetched
        """
        self.current_page = current
        self.total_pages = total
        self.page_size = page_size

        page_indicator = self.query_one("#page-indicator", Label)
        suffix = " …" if busy else ""
        page_indicator.update(f"Page [b]{current}[/b] of [b]{total}[/b]{suffix}")

        first_btn = self.query_one("#first-page", Button)
        prev_btn = self.query_one("#prev-page", Button)
        next_btn = self.query_one("#next-page", Button)
        last_btn = self.query_one("#last-page", Button)

        first_btn.disabled = prev_btn.disabled = (current <= 1)
        next_btn.disabled = last_btn.disabled = (current >= total)

        size_select = self.query_one("#page-size", Select)
        size_select.disabled = busy
        # while busy the picker keeps the size being fetched
        if not busy and size_select.value != page_size:
            with size_select.prevent(Select.Changed):
                size_select.value = page_size

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination button presses"""
        event.stop()
        button_id = event.button.id
        new_page = self.current_page

        if button_id == "first-page":
            new_page = 1
        elif button_id == "last-page":
            new_page = self.total_pages
        elif button_id == "prev-page" and self.current_page > 1:
            new_page = self.current_page - 1
        elif button_id == "next-page" and self.current_page < self.total_pages:
            new_page = self.current_page + 1

        if new_page != self.current_page:
            self.post_message(self.PageChanged(new_page))

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        if event.select.id == "page-size" and isinstance(event.value, int) and event.value != self.page_size:
            self.post_message(self.PageSizeChanged(event.value))
