"""
Responsive layout solver for the three-column chat shell.

Converts a terminal size plus the live message text into exact character-cell
dimensions for every bordered, padded region. The solver runs in two explicit
phases: widths first (they only depend on the terminal width and the fixed
glyphs), then heights (the message field height depends on how its text wraps
at the width computed in the first phase).

Every function here is pure and total over ``width >= 0, height >= 0``.
Quantities that would go negative are clamped to a documented floor instead.
"""

import re
from dataclasses import dataclass
from typing import List

from wcwidth import wcswidth, wcwidth

from .config import DEFAULT_CONFIG, ShellConfig


def display_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies.

    Non-printable characters count as zero cells.
    """
    width = wcswidth(text)
    if width >= 0:
        return width
    return sum(max(0, wcwidth(ch)) for ch in text)


_CHUNKS = re.compile(r'\s+|\S+')


def _wrap_line(line: str, width: int) -> List[str]:
    rows = []
    row, used = '', 0
    for chunk in _CHUNKS.findall(line):
        cells = display_width(chunk)
        if used + cells <= width:
            row, used = row + chunk, used + cells
        elif cells <= width:
            rows.append(row)
            row, used = chunk, cells
        else:
            # Wider than a whole row: fill the current row, then split by cells.
            for ch in chunk:
                cells = display_width(ch)
                if used and used + cells > width:
                    rows.append(row)
                    row, used = '', 0
                row, used = row + ch, used + cells
    rows.append(row)
    return rows


def wrap_lines(text: str, width: int) -> List[str]:
    """Break ``text`` into visual lines of at most ``width`` terminal cells.

    Each hard line is wrapped on its own; an empty hard line still occupies
    one visual line. Lines break between words where possible and inside a
    word only when it is wider than a whole line. Whitespace is preserved so
    the concatenated chunks of a hard line reproduce it exactly.
    """
    width = max(1, width)
    lines = []
    for line in text.split('\n'):
        lines.extend(_wrap_line(line, width))
    return lines


def wrapped_line_count(text: str, width: int) -> int:
    """Number of visual lines ``text`` occupies at ``width`` cells."""
    return len(wrap_lines(text, width))


def _clamp(val, floor):
    return max(floor, val)


@dataclass(frozen=True)
class TerminalFrame:
    """Current terminal size in character cells.

    A zero width means the terminal has not reported its size yet.
    """
    width: int = 0
    height: int = 0

    @property
    def sized(self) -> bool:
        return self.width > 0


@dataclass(frozen=True)
class BoxSpec:
    """Resolved dimensions of one region.

    Attributes:
        content_width: Usable interior columns
        content_height: Usable interior rows
        border_cells: Cells taken by the border on each axis (0 or 2)
        padding_cells: Horizontal cells taken by padding (0 or 2)
        margin_cells: Blank rows above the box
    """
    content_width: int
    content_height: int
    border_cells: int = 0
    padding_cells: int = 0
    margin_cells: int = 0

    @property
    def rendered_width(self) -> int:
        return self.content_width + self.border_cells + self.padding_cells

    @property
    def rendered_height(self) -> int:
        return self.content_height + self.border_cells + self.margin_cells


@dataclass(frozen=True)
class Widths:
    """Output of the width phase."""
    left_sidebar_rendered: int
    right_sidebar_rendered: int
    center_rendered: int
    header_content: int
    left_cluster: int
    right_cluster: int
    search_content: int
    search_input: int
    status_content: int
    main_content: int
    message_box_content: int
    message_input: int


@dataclass(frozen=True)
class Heights:
    """Output of the height phase."""
    message_lines: int
    message_field: int
    header_rendered: int
    status: int
    message_box_rendered: int
    available_main: int
    main_content: int
    center_column: int
    sidebar_content: int


@dataclass(frozen=True)
class Layout:
    """Every region of the shell, resolved for a single frame."""
    frame: TerminalFrame
    widths: Widths
    heights: Heights
    left_sidebar: BoxSpec
    right_sidebar: BoxSpec
    header: BoxSpec
    search: BoxSpec
    status: BoxSpec
    main: BoxSpec
    message_box: BoxSpec

    @property
    def search_input_width(self) -> int:
        return self.widths.search_input

    @property
    def message_input_width(self) -> int:
        return self.widths.message_input

    @property
    def message_field_height(self) -> int:
        return self.heights.message_field


def left_cluster_width(config: ShellConfig = DEFAULT_CONFIG) -> int:
    """Width of logo, channel, divider, topic and divider, each with a trailing margin."""
    items = (
        config.logo_glyph,
        config.channel_name,
        config.divider_glyph,
        config.topic,
        config.divider_glyph,
    )
    return sum(display_width(item) + config.cluster_margin for item in items)


def icon_box_width(glyph: str, config: ShellConfig = DEFAULT_CONFIG) -> int:
    """Width of an icon box: left margin, padding on both sides, glyph."""
    return config.cluster_margin + config.padding_cells + display_width(glyph)


def right_cluster_width(config: ShellConfig = DEFAULT_CONFIG) -> int:
    """Width of the bell and info icon boxes."""
    return (icon_box_width(config.bell_glyph, config) +
            icon_box_width(config.info_glyph, config))


def center_rendered_width(terminal_width: int, config: ShellConfig = DEFAULT_CONFIG) -> int:
    """Rendered width of the center column, never below ``min_center_width``."""
    sidebars = (config.left_sidebar_width + config.border_cells +
                config.right_sidebar_width + config.border_cells)
    return _clamp(terminal_width - sidebars, config.min_center_width)


def solve_widths(frame: TerminalFrame, config: ShellConfig = DEFAULT_CONFIG) -> Widths:
    """Width phase: resolve every horizontal dimension from the terminal width."""
    left_sidebar = config.left_sidebar_width + config.border_cells
    right_sidebar = config.right_sidebar_width + config.border_cells
    center = center_rendered_width(frame.width, config)
    boxed = center - config.border_cells - config.padding_cells

    left = left_cluster_width(config)
    right = right_cluster_width(config)
    search = _clamp(boxed - left - right - config.padding_cells, config.min_search_width)

    message_input = _clamp(
        boxed
        - display_width(config.message_prompt)
        - display_width(config.message_icons)
        - config.wrap_guard,
        config.min_input_width,
    )

    return Widths(
        left_sidebar_rendered=left_sidebar,
        right_sidebar_rendered=right_sidebar,
        center_rendered=center,
        header_content=boxed,
        left_cluster=left,
        right_cluster=right,
        search_content=search,
        search_input=search - display_width(config.search_prompt),
        status_content=center - config.border_cells,
        main_content=boxed,
        message_box_content=boxed,
        message_input=message_input,
    )


def message_field_height(line_count: int, config: ShellConfig = DEFAULT_CONFIG) -> int:
    """Visible rows of the message field for a wrapped line count."""
    height = 1 if line_count <= 1 else 2
    return min(height, config.max_message_height)


def sidebar_content_height(center_column_height: int,
                           config: ShellConfig = DEFAULT_CONFIG) -> int:
    """Sidebar interior rows that mirror the realized center column height."""
    return _clamp(
        center_column_height - config.sidebar_top_margin - config.border_cells,
        0,
    )


def solve_heights(frame: TerminalFrame, widths: Widths, message_text: str = '',
                  config: ShellConfig = DEFAULT_CONFIG) -> Heights:
    """Height phase: resolve vertical dimensions once widths are known."""
    lines = wrapped_line_count(message_text, widths.message_input)
    field = message_field_height(lines, config)

    header = config.header_top_margin + config.border_cells + 1
    message_box = field + config.border_cells
    available = _clamp(
        frame.height - config.app_top_margin - header - config.status_height - message_box,
        0,
    )
    main_content = _clamp(available - config.border_cells, 0)
    center = header + config.status_height + main_content + config.border_cells + message_box

    return Heights(
        message_lines=lines,
        message_field=field,
        header_rendered=header,
        status=config.status_height,
        message_box_rendered=message_box,
        available_main=available,
        main_content=main_content,
        center_column=center,
        sidebar_content=sidebar_content_height(center, config),
    )


def solve_layout(frame: TerminalFrame, message_text: str = '',
                 config: ShellConfig = DEFAULT_CONFIG) -> Layout:
    """Run both phases and return a spec for every region."""
    widths = solve_widths(frame, config)
    heights = solve_heights(frame, widths, message_text, config)
    border = config.border_cells
    padding = config.padding_cells

    return Layout(
        frame=frame,
        widths=widths,
        heights=heights,
        left_sidebar=BoxSpec(config.left_sidebar_width, heights.sidebar_content,
                             border, 0, config.sidebar_top_margin),
        right_sidebar=BoxSpec(config.right_sidebar_width, heights.sidebar_content,
                              border, 0, config.sidebar_top_margin),
        header=BoxSpec(widths.header_content, 1, border, padding, config.header_top_margin),
        search=BoxSpec(widths.search_content, 1, 0, padding),
        status=BoxSpec(widths.status_content, config.status_height, 0, padding),
        main=BoxSpec(widths.main_content, heights.main_content, border, padding),
        message_box=BoxSpec(widths.message_box_content, heights.message_field,
                            border, padding),
    )
