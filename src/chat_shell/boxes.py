"""
Character-grid primitives used to compose the shell.

A line is a tuple of ``Span`` objects. Spans carry plain text and an optional
style callable (typically a blessed ``FormattingString``), so widths are always
measured on the plain text and escape sequences are only added at the end.
A ``Block`` is a rectangle of such lines with a known width.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .layout import BoxSpec, display_width


@dataclass(frozen=True)
class Span:
    """A run of text drawn with a single style."""
    text: str
    style: Optional[Callable[[str], str]] = None

    @property
    def width(self) -> int:
        return display_width(self.text)

    def render(self) -> str:
        if self.style is None or not self.text:
            return self.text
        return self.style(self.text)


Line = Tuple[Span, ...]


@dataclass(frozen=True)
class Border:
    """Box-drawing characters for one border kind."""
    top_left: str
    horizontal: str
    top_right: str
    vertical: str
    bottom_right: str
    bottom_left: str


NORMAL_BORDER = Border('┌', '─', '┐', '│', '┘', '└')
ROUNDED_BORDER = Border('╭', '─', '╮', '│', '╯', '╰')


def line_width(line: Sequence[Span]) -> int:
    return sum(span.width for span in line)


def _truncate(text: str, width: int) -> str:
    out = []
    used = 0
    for ch in text:
        w = display_width(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return ''.join(out)


def fit_line(line: Sequence[Span], width: int, fill: Optional[Span] = None) -> Line:
    """Truncate or pad ``line`` so it is exactly ``width`` cells wide.

    Padding uses the style of ``fill`` when given.
    """
    fitted = []
    remaining = max(0, width)
    for span in line:
        if remaining <= 0:
            break
        if span.width <= remaining:
            fitted.append(span)
            remaining -= span.width
        else:
            text = _truncate(span.text, remaining)
            fitted.append(Span(text, span.style))
            remaining -= display_width(text)
            break
    if remaining > 0:
        style = fill.style if fill is not None else None
        fitted.append(Span(' ' * remaining, style))
    return tuple(fitted)


def render_line(line: Sequence[Span]) -> str:
    return ''.join(span.render() for span in line)


@dataclass(frozen=True)
class Block:
    """A rectangle of lines, all ``width`` cells wide."""
    lines: Tuple[Line, ...]
    width: int

    @property
    def height(self) -> int:
        return len(self.lines)

    def render(self) -> str:
        return '\n'.join(render_line(line) for line in self.lines)


def blank_line(width: int, style=None) -> Line:
    return (Span(' ' * width, style),) if width > 0 else ()


def render_box(content: Sequence[Sequence[Span]], spec: BoxSpec,
               border: Optional[Border] = None, border_style=None,
               fill_style=None) -> Block:
    """Draw ``content`` inside a box sized by ``spec``.

    Content is fitted to ``spec.content_width`` x ``spec.content_height``
    (truncated or padded), surrounded by horizontal padding, an optional border
    and ``spec.margin_cells`` blank rows on top.
    """
    fill = Span('', fill_style)
    rows = list(content)[:spec.content_height]
    while len(rows) < spec.content_height:
        rows.append(())

    pad = spec.padding_cells // 2
    pad_left = blank_line(pad, fill_style)
    pad_right = blank_line(spec.padding_cells - pad, fill_style)
    inner_width = spec.content_width + spec.padding_cells

    lines: List[Line] = []
    for row in rows:
        lines.append(pad_left + fit_line(row, spec.content_width, fill) + pad_right)

    if border is not None and spec.border_cells:
        def edge(ch):
            return Span(ch, border_style)

        top = (edge(border.top_left + border.horizontal * inner_width + border.top_right),)
        bottom = (edge(border.bottom_left + border.horizontal * inner_width + border.bottom_right),)
        lines = [top] + [(edge(border.vertical),) + line + (edge(border.vertical),)
                         for line in lines] + [bottom]

    width = spec.rendered_width
    margin = [blank_line(width) for _ in range(spec.margin_cells)]
    return Block(tuple(margin + lines), width)


def join_horizontal(*blocks: Block) -> Block:
    """Place blocks side by side, aligned to the top."""
    height = max((block.height for block in blocks), default=0)
    lines = []
    for row in range(height):
        line: Line = ()
        for block in blocks:
            if row < block.height:
                line += block.lines[row]
            else:
                line += blank_line(block.width)
        lines.append(line)
    return Block(tuple(lines), sum(block.width for block in blocks))


def join_vertical(*blocks: Block) -> Block:
    """Stack blocks, aligned to the left and padded to the widest."""
    width = max((block.width for block in blocks), default=0)
    lines = []
    for block in blocks:
        for line in block.lines:
            lines.append(fit_line(line, width))
    return Block(tuple(lines), width)
