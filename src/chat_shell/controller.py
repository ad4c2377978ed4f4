"""
Focus and render controller for the chat shell.

The controller owns the search and message fields, routes keyboard input,
tracks which field is focused, asks the layout solver for the current
dimensions and composes the whole screen into one string per frame. ``run()``
drives it from a blessed event loop.
"""

import logging
import signal
from dataclasses import replace
from enum import Enum
from typing import Optional

from blessed import Terminal

from .boxes import (
    NORMAL_BORDER,
    ROUNDED_BORDER,
    Block,
    Span,
    blank_line,
    join_horizontal,
    join_vertical,
    render_box,
)
from .config import DEFAULT_CONFIG, Palette, ShellConfig
from .layout import Layout, TerminalFrame, display_width, sidebar_content_height, solve_layout
from .widgets import FieldStyles, MessageField, SearchField

logger = logging.getLogger(__name__)

QUIT_KEYS = ('\x03',)


class FocusState(Enum):
    """Which field receives editing keys."""
    SEARCH = 'search'
    MESSAGE = 'message'

    def toggled(self) -> 'FocusState':
        return FocusState.MESSAGE if self is FocusState.SEARCH else FocusState.SEARCH


def accent_for(is_focused: bool, palette: Palette = DEFAULT_CONFIG.palette) -> int:
    """Colour for a field's prompt, text or border given its focus."""
    return palette.accent if is_focused else palette.neutral


def _chain(*styles):
    def style(text):
        for fmt in reversed(styles):
            text = fmt(text)
        return text
    return style


class ShellController:
    """Owns the input fields and turns events into full-screen frames.

    Attributes:
        config: Immutable shell configuration
        term: Blessed Terminal used for styling and I/O
        frame: Last terminal size reported by a resize
        search: The header search field
        message: The bottom message field
        running: Whether the event loop is active
        redraw: Whether the screen needs to be redrawn
    """

    def __init__(
        self,
        *,
        config: ShellConfig = DEFAULT_CONFIG,
        term: Optional[Terminal] = None,
        inkey_timeout: float = 0.1,
        register_resize_handler: bool = True,
    ):
        self.config = config
        self.term = term or Terminal()
        self.inkey_timeout = inkey_timeout
        self.frame = TerminalFrame()
        self.search = SearchField(
            placeholder=config.search_placeholder,
            prompt=config.search_prompt,
            char_limit=config.search_char_limit,
            blink_interval=config.blink_interval,
        )
        self.message = MessageField(
            placeholder=config.message_placeholder,
            prompt=config.message_prompt,
            blink_interval=config.blink_interval,
        )
        self._focus = FocusState.MESSAGE
        self.message.focus()
        self.running = False
        self.redraw = True
        self._resize_pending = False
        if register_resize_handler:
            signal.signal(signal.SIGWINCH, self._handle_sigwinch)

    @property
    def focus(self) -> FocusState:
        return self._focus

    def toggle_focus(self):
        """Move focus to the other field."""
        self._focus = self._focus.toggled()
        if self._focus is FocusState.SEARCH:
            self.message.blur()
            self.search.focus()
        else:
            self.search.blur()
            self.message.focus()
        logger.debug("Focus moved to %s", self._focus.value)
        self.redraw = True

    def handle_resize(self, width: int, height: int):
        """Record a new terminal size."""
        self.frame = TerminalFrame(max(0, width), max(0, height))
        logger.debug("Terminal resized to %dx%d", self.frame.width, self.frame.height)
        self.layout()
        self.redraw = True

    def handle_key(self, key) -> bool:
        """Process one keystroke; return False once the shell should quit."""
        if str(key) in QUIT_KEYS:
            self.quit()
            return False
        if key.name == 'KEY_TAB' or str(key) == '\t':
            self.toggle_focus()
        else:
            # Both fields see the key; only the focused one edits its buffer.
            changed = self.search.handle_input(key)
            changed = self.message.handle_input(key) or changed
            self.redraw = self.redraw or changed
        self.layout()
        return True

    def quit(self):
        self.running = False

    def tick(self, now=None) -> bool:
        """Advance cursor blink; return True when a redraw is needed."""
        changed = self.search.tick(now)
        changed = self.message.tick(now) or changed
        self.redraw = self.redraw or changed
        return changed

    def layout(self) -> Layout:
        """Solve the layout for the current frame and size both fields to it."""
        layout = solve_layout(self.frame, self.message.value, self.config)
        self.search.width = layout.search_input_width
        self.message.width = layout.message_input_width
        self.message.height = layout.message_field_height
        return layout

    # Rendering

    def _color(self, index):
        return self.term.color(index)

    def _field_styles(self, field, text_style) -> FieldStyles:
        return FieldStyles(
            text=text_style,
            prompt=self._color(accent_for(field.focused, self.config.palette)),
            placeholder=self._color(self.config.palette.neutral),
            cursor=self.term.reverse,
        )

    def _render_header(self, layout: Layout) -> Block:
        config = self.config
        palette = config.palette
        neutral = self._color(palette.neutral)
        margin = ' ' * config.cluster_margin

        left = []
        for text, style in (
            (config.logo_glyph, self._color(palette.accent)),
            (config.channel_name, _chain(self.term.bold, self._color(palette.text))),
            (config.divider_glyph, neutral),
            (config.topic, self._color(palette.muted)),
            (config.divider_glyph, neutral),
        ):
            left += [Span(text, style), Span(margin)]

        accent = self._color(accent_for(self.search.focused, palette))
        search = render_box(
            [self.search.view(self._field_styles(self.search, accent))],
            layout.search,
        )

        right = []
        for glyph in (config.bell_glyph, config.info_glyph):
            right += [Span(margin), Span(' '), Span(glyph, self._color(palette.text)), Span(' ')]

        row = tuple(left) + search.lines[0] + tuple(right)
        return render_box([row], layout.header, NORMAL_BORDER, neutral)

    def _render_status(self, layout: Layout) -> Block:
        style = _chain(self._color(self.config.palette.text),
                       self.term.on_color(self.config.palette.accent))
        return render_box([(Span(self.config.status_text, style),)], layout.status,
                          fill_style=style)

    def _render_main(self, layout: Layout) -> Block:
        return render_box([], layout.main, NORMAL_BORDER, self._color(self.config.palette.neutral))

    def _render_message_box(self, layout: Layout) -> Block:
        config = self.config
        accent = self._color(accent_for(self.message.focused, config.palette))
        prompt = Span(config.message_prompt, accent)
        icons = Span(config.message_icons, self._color(config.palette.neutral))

        field = self.message.view(self._field_styles(self.message, None))
        rows = [(prompt,) + field[0] + (icons,)]
        for line in field[1:]:
            rows.append(blank_line(display_width(config.message_prompt)) + line)
        return render_box(rows, layout.message_box, ROUNDED_BORDER, accent)

    def _render_sidebar(self, spec, center_height) -> Block:
        spec = replace(spec, content_height=sidebar_content_height(center_height, self.config))
        return render_box([], spec, NORMAL_BORDER, self._color(self.config.palette.neutral))

    def compose(self) -> Block:
        """Compose the whole screen as a block."""
        layout = self.layout()
        center = join_vertical(
            self._render_header(layout),
            self._render_status(layout),
            self._render_main(layout),
            self._render_message_box(layout),
        )
        shell = join_horizontal(
            self._render_sidebar(layout.left_sidebar, center.height),
            center,
            self._render_sidebar(layout.right_sidebar, center.height),
        )
        margin = Block(tuple(blank_line(shell.width) for _ in range(self.config.app_top_margin)),
                       shell.width)
        return join_vertical(margin, shell)

    def render(self) -> str:
        """Render the full screen as a single string."""
        if not self.frame.sized:
            return self.config.loading_text
        return self.compose().render()

    # Event loop

    def _handle_sigwinch(self, signum, frame):
        """Flag a resize; the loop picks up the new size."""
        self._resize_pending = True

    def _process_resize(self):
        self._resize_pending = False
        self.handle_resize(self.term.width, self.term.height)

    def _draw(self):
        self.redraw = False
        print(self.term.home + self.render() + self.term.clear_eos, end='', flush=True)

    def _set_title(self):
        if self.term.does_styling:
            print(f'\x1b]0;{self.config.title}\x07', end='', flush=True)

    def run(self):
        """Enter the main event loop until the quit key is pressed."""
        if self.running:
            raise RuntimeError("ShellController.run() is already running.")

        self.running = True
        self._set_title()
        logger.info("Starting chat shell")
        try:
            with self.term.fullscreen(), self.term.cbreak(), self.term.hidden_cursor():
                self.handle_resize(self.term.width, self.term.height)
                self._draw()

                while self.running:
                    if self._resize_pending:
                        self._process_resize()

                    key = self.term.inkey(timeout=self.inkey_timeout)
                    if key and not self.handle_key(key):
                        break

                    self.tick()
                    if self.redraw:
                        self._draw()
        except KeyboardInterrupt:
            logger.debug("Interrupted")
        finally:
            self.running = False
        logger.info("Chat shell stopped")
