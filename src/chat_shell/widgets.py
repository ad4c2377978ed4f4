"""
Focusable text fields for the chat shell.

``SearchField`` is a single-line field that scrolls horizontally.
``MessageField`` is a multi-line field shown one or two rows tall that
scrolls vertically to keep the cursor visible. Both only change their
buffer while focused.
"""

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .boxes import Line, Span, fit_line
from .layout import display_width, wrap_lines

Style = Optional[Callable[[str], str]]

BACKSPACE_CHARS = ('\x7f', '\x08')
NEWLINE_CHARS = ('\n', '\r')


@dataclass(frozen=True)
class FieldStyles:
    """Styles a field draws with; chosen by the controller from focus state."""
    text: Style = None
    prompt: Style = None
    placeholder: Style = None
    cursor: Style = None


class InputField:
    """Base class for editable fields.

    Attributes:
        value: Current text buffer
        cursor: Cursor index into ``value``
        placeholder: Text shown while the buffer is empty
        prompt: Text drawn before the field
        char_limit: Maximum buffer length, or 0 for unlimited
        width: Editable width in cells, set by the controller each frame
        focused: Whether the field accepts editing keys
        cursor_visible: Blink phase of the cursor
    """

    multiline = False

    def __init__(self, placeholder='', prompt='', char_limit=0, blink_interval=0.53):
        self.value = ''
        self.cursor = 0
        self.placeholder = placeholder
        self.prompt = prompt
        self.char_limit = char_limit
        self.width = 1
        self.focused = False
        self.blink_interval = blink_interval
        self.cursor_visible = True
        self._last_blink = time.monotonic()

    def focus(self):
        self.focused = True
        self.reset_blink()

    def blur(self):
        self.focused = False

    def set_value(self, text: str):
        """Replace the buffer and move the cursor to its end."""
        if not self.multiline:
            text = text.replace('\n', ' ')
        if self.char_limit:
            text = text[:self.char_limit]
        self.value = text
        self.cursor = len(text)

    def insert(self, text: str) -> bool:
        if self.char_limit:
            text = text[:max(0, self.char_limit - len(self.value))]
        if not text:
            return False
        self.value = self.value[:self.cursor] + text + self.value[self.cursor:]
        self.cursor += len(text)
        return True

    def reset_blink(self, now=None):
        self.cursor_visible = True
        self._last_blink = time.monotonic() if now is None else now

    def tick(self, now=None) -> bool:
        """Advance the cursor blink; return True when the phase changed."""
        if not self.focused:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_blink < self.blink_interval:
            return False
        self.cursor_visible = not self.cursor_visible
        self._last_blink = now
        return True

    def handle_input(self, key) -> bool:
        """Apply an editing key; return True when the buffer or cursor moved.

        Blurred fields ignore every key.
        """
        if not self.focused:
            return False
        self.reset_blink()

        ch = str(key)
        match key.name:
            case 'KEY_BACKSPACE':
                return self._backspace()
            case 'KEY_DELETE':
                if self.cursor < len(self.value):
                    self.value = self.value[:self.cursor] + self.value[self.cursor + 1:]
                    return True
                return False
            case 'KEY_LEFT':
                return self._move(self.cursor - 1)
            case 'KEY_RIGHT':
                return self._move(self.cursor + 1)
            case 'KEY_HOME':
                return self._move(self._line_start())
            case 'KEY_END':
                return self._move(self._line_end())
            case 'KEY_ENTER':
                return self.multiline and self.insert('\n')

        if key.is_sequence:
            return False
        if ch in BACKSPACE_CHARS:
            return self._backspace()
        if ch in NEWLINE_CHARS:
            return self.multiline and self.insert('\n')
        if ch and ch.isprintable():
            return self.insert(ch)
        return False

    def _backspace(self):
        if self.cursor == 0:
            return False
        self.value = self.value[:self.cursor - 1] + self.value[self.cursor:]
        self.cursor -= 1
        return True

    def _move(self, pos):
        pos = max(0, min(len(self.value), pos))
        if pos == self.cursor:
            return False
        self.cursor = pos
        return True

    def _line_start(self):
        return self.value.rfind('\n', 0, self.cursor) + 1

    def _line_end(self):
        end = self.value.find('\n', self.cursor)
        return len(self.value) if end < 0 else end

    def _cursor_spans(self, text, col, styles) -> Line:
        """Spans for ``text`` with the cursor drawn over column ``col``."""
        if not (self.focused and self.cursor_visible):
            return (Span(text, styles.text),)
        under = text[col:col + 1] or ' '
        return (
            Span(text[:col], styles.text),
            Span(under, styles.cursor),
            Span(text[col + 1:], styles.text),
        )

    def _placeholder_line(self, styles) -> Line:
        text = self.placeholder[:max(0, self.width)]
        if self.focused and self.cursor_visible:
            return (Span(text[:1] or ' ', styles.cursor), Span(text[1:], styles.placeholder))
        return (Span(text, styles.placeholder),)


class SearchField(InputField):
    """Single-line search field with horizontal scrolling."""

    def __init__(self, placeholder='Search', prompt='', char_limit=156, **kwargs):
        super().__init__(placeholder=placeholder, prompt=prompt,
                         char_limit=char_limit, **kwargs)
        self.offset = 0

    def _scroll(self):
        """Move ``offset`` so the cursor cell fits inside ``width`` cells."""
        width = max(1, self.width)
        self.offset = max(0, min(self.offset, self.cursor))
        under = display_width(self.value[self.cursor:self.cursor + 1]) or 1
        while (self.offset < self.cursor and
               display_width(self.value[self.offset:self.cursor]) + under > width):
            self.offset += 1

    def view(self, styles: FieldStyles) -> Line:
        """Prompt followed by the visible part of the field, ``width`` cells wide."""
        prompt = (Span(self.prompt, styles.prompt),)
        if not self.value:
            body = self._placeholder_line(styles)
        else:
            self._scroll()
            visible = self.value[self.offset:]
            body = self._cursor_spans(visible, self.cursor - self.offset, styles)
        return prompt + fit_line(body, self.width)


class MessageField(InputField):
    """Multi-line message field shown at a height chosen by the layout."""

    multiline = True

    def __init__(self, placeholder='', prompt='', char_limit=0, **kwargs):
        super().__init__(placeholder=placeholder, prompt=prompt,
                         char_limit=char_limit, **kwargs)
        self.height = 1
        self.offset = 0

    def _rows(self):
        """Wrapped rows of the buffer and the cursor's (row, column) among them.

        A cursor sitting after a row that already fills the width is given an
        empty row of its own, so it is never drawn outside the field.
        """
        rows = []
        cursor = None
        start = 0
        for hard_line in self.value.split('\n'):
            chunks = wrap_lines(hard_line, self.width)
            end = start + len(hard_line)
            if cursor is None and self.cursor <= end:
                col = self.cursor - start
                for i, chunk in enumerate(chunks):
                    if col < len(chunk) or i == len(chunks) - 1:
                        break
                    col -= len(chunk)
                if chunk and col == len(chunk) and display_width(chunk) >= max(1, self.width):
                    chunks = chunks + ['']
                    i, col = i + 1, 0
                cursor = (len(rows) + i, col)
            rows.extend(chunks)
            start = end + 1
        return rows, cursor or (max(0, len(rows) - 1), 0)

    def cursor_position(self):
        """Visual (row, column) of the cursor once the buffer is wrapped."""
        return self._rows()[1]

    def view(self, styles: FieldStyles) -> List[Line]:
        """``height`` lines of the field, each ``width`` cells wide."""
        height = max(1, self.height)
        if not self.value:
            lines = [self._placeholder_line(styles)] + [()] * (height - 1)
            return [fit_line(line, self.width) for line in lines]

        visual, (row, col) = self._rows()
        if row < self.offset:
            self.offset = row
        elif row >= self.offset + height:
            self.offset = row - height + 1
        self.offset = max(0, min(self.offset, max(0, len(visual) - height)))

        lines = []
        for i in range(self.offset, self.offset + height):
            text = visual[i] if i < len(visual) else ''
            if i == row:
                line = self._cursor_spans(text, col, styles)
            else:
                line = (Span(text, styles.text),)
            lines.append(fit_line(line, self.width))
        return lines
