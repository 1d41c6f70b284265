"""
Search bar widget for record filtering
"""

from typing import Optional

from textual.containers import Container
from textual.message import Message
from textual.widgets import Button, Input


class SearchBar(Container):
    """
    Search bar widget with input, search and clear buttons
    """

    DEFAULT_CSS = """
    SearchBar {
        layout: horizontal;
        height: 3;
    }

    SearchBar > #search-input {
        width: 1fr;
    }
    """

    class Submitted(Message):
        """Search submitted message"""
        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    def __init__(
        self,
        placeholder: str = "Search...",
        *,
        id: Optional[str] = None,
        classes: Optional[str] = None,
    ) -> None:
        """
        Initialize the SearchBar

        Args:
            placeholder: Hint shown in the empty input
            id: Optional widget ID
            classes: Optional CSS classes
        """
        super().__init__(id=id, classes=classes)
        self._placeholder = placeholder
        self._query = ""

    def compose(self):
        """Create child widgets"""
        yield Input(placeholder=self._placeholder, id="search-input")
        yield Button("Search", id="search-btn")
        yield Button("Clear", id="clear-btn")

    @property
    def current_query(self) -> str:
        """Get the current search query"""
        return self._query

    def focus_input(self) -> None:
        """Focus the search input"""
        self.query_one("#search-input", Input).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "search-btn":
            self._submit_search()
        elif event.button.id == "clear-btn":
            self.query_one("#search-input", Input).value = ""
            self._submit_search()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle input submission (Enter key)"""
        if event.input.id == "search-input":
            event.stop()
            self._submit_search()

    def _submit_search(self) -> None:
        input_widget = self.query_one("#search-input", Input)
        self._query = input_widget.value.strip()
        self.post_message(self.Submitted(self._query))
