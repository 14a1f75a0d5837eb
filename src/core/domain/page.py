"""Page regions driven by the controller.

Every region on `PageState` is optional. A region set to `None` is "not on
this page": the controller skips whatever it would have done there instead of
failing the whole action.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class InputField:
    value: str = ""
    invalid: bool = False

    def clear(self) -> None:
        self.value = ""
        self.invalid = False


@dataclass
class DisplayField:
    """Rendered text plus an optional full-value tooltip."""

    text: str = ""
    title: str | None = None


SHORTEN_FIELDS = ("short_url", "original_url", "created_at", "expires_at")
STATS_FIELDS = (
    "original_url",
    "short_code",
    "access_count",
    "created_at",
    "updated_at",
    "expires_at",
)


@dataclass
class ResultPanel:
    name: str
    field_names: tuple[str, ...]
    fields: dict[str, DisplayField] = field(default_factory=dict)
    visible: bool = False
    in_view: bool = False

    def populate(self, values: dict[str, DisplayField]) -> None:
        unknown = set(values) - set(self.field_names)
        if unknown:
            raise KeyError(f"Unknown fields for panel {self.name!r}: {sorted(unknown)}")
        self.fields = {name: values.get(name, DisplayField()) for name in self.field_names}

    def reveal(self) -> None:
        self.visible = True

    def scroll_into_view(self) -> None:
        self.in_view = True

    def hide(self) -> None:
        self.visible = False
        self.in_view = False

    def text(self, name: str) -> str:
        entry = self.fields.get(name)
        return entry.text if entry else ""


@dataclass
class CopyButton:
    default_label: str = "Copy"
    label: str = "Copy"
    highlighted: bool = False

    def confirm(self, label: str = "Copied!") -> None:
        self.label = label
        self.highlighted = True

    def reset(self) -> None:
        self.label = self.default_label
        self.highlighted = False


@dataclass
class LoadingIndicator:
    visible: bool = False


def shorten_panel() -> ResultPanel:
    return ResultPanel(name="shorten_result", field_names=SHORTEN_FIELDS)


def stats_panel() -> ResultPanel:
    return ResultPanel(name="stats_result", field_names=STATS_FIELDS)


@dataclass
class PageState:
    """All regions of the single page. Defaults build a complete page."""

    long_url: InputField | None = field(default_factory=InputField)
    short_code: InputField | None = field(default_factory=InputField)
    shorten_result: ResultPanel | None = field(default_factory=shorten_panel)
    stats_result: ResultPanel | None = field(default_factory=stats_panel)
    copy_button: CopyButton | None = field(default_factory=CopyButton)
    loading: LoadingIndicator | None = field(default_factory=LoadingIndicator)
