# finance_tracker/ui/screens/record_form_screen.py
"""
Modal form for creating or editing one record.

The form works on an EditorSession: it is opened with one, edits a copy,
and hands the result to `submit`. Validation errors keep the form open
and are shown under the fields.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Select

from finance_tracker.errors import FinanceTrackerError, ValidationError
from finance_tracker.models.editor import EditorSession
from finance_tracker.ui.views import FieldSpec
from simple_logger import Slogger

Option = Tuple[str, str]
Submit = Callable[[EditorSession], Awaitable[None]]


class RecordFormScreen(ModalScreen[Optional[EditorSession]]):
    """Create / edit form driven by FieldSpecs."""

    DEFAULT_CSS = """
    RecordFormScreen {
        align: center middle;
    }

    #record-form {
        width: 70;
        max-height: 90%;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }

    #form-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .form-label {
        margin-top: 1;
    }

    #form-error {
        color: $error;
        margin-top: 1;
    }

    #form-buttons {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }
    """

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        ("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self,
        title: str,
        fields: Sequence[FieldSpec],
        session: EditorSession,
        submit: Submit,
        lookups: Optional[Dict[str, List[Option]]] = None,
    ) -> None:
        super().__init__()
        self.form_title = title
        self.fields = tuple(fields)
        self.session = session
        self._submit = submit
        self._lookups = lookups or {}
        self._saving = False

    # ------------------------------------------------------------------ #
    # compose
    # ------------------------------------------------------------------ #

    def _options_for(self, spec: FieldSpec, values: Dict[str, str]) -> List[Option]:
        if spec.kind == "choice":
            return list(spec.options)
        key = spec.key
        if spec.depends_on:
            key = f"{spec.key}:{values.get(spec.depends_on, '')}"
        return list(self._lookups.get(key, []))

    def _make_select(self, spec: FieldSpec, options: List[Option], value: str) -> Select:
        kwargs = {}
        if value in {v for _, v in options}:
            kwargs["value"] = value
        return Select(
            options,
            prompt=f"Select {spec.label.lower()}",
            allow_blank=spec.kind == "lookup",
            id=f"field-{spec.key}",
            **kwargs,
        )

    def compose(self) -> ComposeResult:
        values = {k: str(v) for k, v in self.session.values.items()}

        with VerticalScroll(id="record-form"):
            yield Label(self.form_title, id="form-title")
            for spec in self.fields:
                marker = " *" if spec.required else ""
                yield Label(f"{spec.label}{marker}", classes="form-label")
                value = values.get(spec.key, "")
                if spec.kind == "text":
                    yield Input(value=value, placeholder=spec.placeholder, id=f"field-{spec.key}")
                else:
                    yield self._make_select(spec, self._options_for(spec, values), value)
            yield Label("", id="form-error")
            with Horizontal(id="form-buttons"):
                yield Button("Cancel", id="cancel-button")
                yield Button("Save", variant="primary", id="save-button")

    def on_mount(self) -> None:
        first = self.fields[0] if self.fields else None
        if first is not None:
            self.query_one(f"#field-{first.key}").focus()

    # ------------------------------------------------------------------ #
    # events
    # ------------------------------------------------------------------ #

    def on_select_changed(self, event: Select.Changed) -> None:
        changed = (event.select.id or "").removeprefix("field-")
        values = self._collect()
        for spec in self.fields:
            if spec.depends_on == changed:
                dependent = self.query_one(f"#field-{spec.key}", Select)
                dependent.set_options(self._options_for(spec, values))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-button":
            self.action_save()
        elif event.button.id == "cancel-button":
            self.action_cancel()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.action_save()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_save(self) -> None:
        if self._saving:
            return
        self.session = self.session.with_values(self._collect())
        self.run_worker(self._save(self.session), group="record_form", exit_on_error=False)

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    def _collect(self) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for spec in self.fields:
            widget = self.query_one(f"#field-{spec.key}")
            if isinstance(widget, Input):
                values[spec.key] = widget.value
            else:
                # option values are strings; anything else is the blank entry
                values[spec.key] = widget.value if isinstance(widget.value, str) else ""
        return values

    def _show_error(self, message: str, field: Optional[str] = None) -> None:
        self.query_one("#form-error", Label).update(message)
        if field and any(spec.key == field for spec in self.fields):
            self.query_one(f"#field-{field}").focus()

    async def _save(self, session: EditorSession) -> None:
        self._saving = True
        self.query_one("#save-button", Button).disabled = True
        try:
            await self._submit(session)
        except ValidationError as e:
            self._show_error(str(e), e.field)
            return
        except FinanceTrackerError as e:
            Slogger.exception(e, "Saving record failed", {"form": self.form_title})
            self._show_error(f"Could not save: {e}")
            return
        finally:
            self._saving = False
            self.query_one("#save-button", Button).disabled = False
        self.dismiss(session)
