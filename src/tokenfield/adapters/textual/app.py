"""Executable Textual demo: a semicolon-separated tag field with suggestions."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, OptionList, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use tokenfield.adapters.textual.app"
    ) from exc

from tokenfield.buffer import BufferMirror, TextBuffer
from tokenfield.config import EngineConfig
from tokenfield.engine import AutoCompleteEngine, CallableValidator, StaticSuggestionSource

from .controller import TextualAutoCompleteAdapter, TextualUIHooks

HIGHWAY_VALUES = (
    "motorway",
    "trunk",
    "primary",
    "secondary",
    "tertiary",
    "unclassified",
    "residential",
    "service",
    "track",
    "path",
    "footway",
    "cycleway",
    "bridleway",
    "steps",
    "pedestrian",
    "living_street",
)


def create_default_engine(config: EngineConfig) -> AutoCompleteEngine:
    """Build an engine over the demo vocabulary, fixing case and spacing."""

    known = set(HIGHWAY_VALUES)
    validator = CallableValidator(
        check=lambda token: token in known,
        fix=lambda token: token.strip().lower().replace(" ", "_"),
    )
    return AutoCompleteEngine.from_config(
        TextBuffer(name="highway"),
        config,
        validator=validator,
        source=StaticSuggestionSource(HIGHWAY_VALUES),
    )


class TokenInput(Input):
    """Input whose backspace first offers to undo the last completion."""

    adapter: TextualAutoCompleteAdapter | None = None

    def action_delete_left(self) -> None:
        if self.adapter is not None and self.adapter.handle_backspace():
            return
        super().action_delete_left()


class TokenFieldApp(App[None]):
    """Minimal Textual UI embedding the autocomplete engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#suggestions {
		height: auto;
		max-height: 10;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self._config = config or EngineConfig.from_env()
        self.adapter: TextualAutoCompleteAdapter | None = None
        self._input: TokenInput | None = None
        self._options: OptionList | None = None
        self._status: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical():
            self._input = TokenInput(placeholder="highway values, e.g. residential;service")
            yield self._input
            self._options = OptionList(id="suggestions")
            self._options.display = False
            yield self._options
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_field=self._update_field,
            show_suggestions=self._show_suggestions,
            hide_suggestions=self._hide_suggestions,
            update_status=self._update_status,
            log=self.log.info,
        )
        self.adapter = TextualAutoCompleteAdapter(create_default_engine(self._config), hooks)
        if self._input is not None:
            self._input.adapter = self.adapter
            self.watch(self._input, "cursor_position", self._cursor_moved, init=False)

    def on_input_changed(self, event: Input.Changed) -> None:
        if self.adapter:
            self.adapter.handle_input_changed(event.value, event.input.cursor_position)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        del event
        if self.adapter:
            self.adapter.handle_blur()

    def on_input_blurred(self, event: Input.Blurred) -> None:
        del event
        # the new focus target is settled after the next refresh
        self.call_after_refresh(self._input_left)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if self.adapter:
            self.adapter.handle_option_selected(str(event.option.prompt))
        if self._input is not None:
            self._input.focus()

    def _input_left(self) -> None:
        if self.adapter and self.focused is not self._input:
            self.adapter.handle_blur(to_suggestions=self.focused is self._options)

    def _cursor_moved(self, cursor: int) -> None:
        if self.adapter:
            self.adapter.handle_cursor_moved(cursor)

    def _update_field(self, mirror: BufferMirror) -> None:
        if self._input is None:
            return
        if self._input.value != mirror.text:
            self._input.value = mirror.text
        self._input.cursor_position = mirror.cursor

    def _show_suggestions(self, candidates: Sequence[str]) -> None:
        if self._options is None:
            return
        self._options.clear_options()
        self._options.add_options(list(candidates))
        self._options.display = True

    def _hide_suggestions(self) -> None:
        if self._options is not None:
            self._options.display = False

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the tokenfield Textual demo.")
    parser.add_argument(
        "--separator",
        default=None,
        help="Token separator (default: TOKENFIELD_SEPARATOR or ';')",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Characters needed before suggestions show (default: 2)",
    )
    parser.add_argument(
        "--no-tokenizer",
        action="store_true",
        help="Treat the field as a single value instead of a list",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.from_env()
    if args.separator is not None:
        config = replace(config, separator=args.separator)
    if args.threshold is not None:
        config = replace(config, threshold=args.threshold)
    if args.no_tokenizer:
        config = replace(config, tokenize=False)
    return config


def main(argv: Optional[Sequence[str]] = None) -> None:
    app = TokenFieldApp(config=build_config(_parse_args(argv)))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
