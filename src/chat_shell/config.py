"""
Immutable configuration for the chat shell.

All structural constants, glyphs and colours live in a single frozen
``ShellConfig`` built once at startup and handed to the layout solver and
the controller.
"""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Palette:
    """256-colour palette indices used by the shell."""
    accent: int = 212
    neutral: int = 240
    muted: int = 243
    text: int = 15


@dataclass(frozen=True)
class ShellConfig:
    """Fixed structural constants for the three-column shell.

    Attributes:
        left_sidebar_width: Content width of the left sidebar
        right_sidebar_width: Content width of the right sidebar
        border_cells: Horizontal (and vertical) cost of a border
        padding_cells: Horizontal cost of ``Padding(0, 1)``
        app_top_margin: Blank rows above the whole shell
        header_top_margin: Blank rows above the header box
        sidebar_top_margin: Blank rows above each sidebar
        status_height: Rows taken by the status line
        min_center_width: Floor for the rendered center column
        min_search_width: Floor for the search box content width
        min_input_width: Floor for the editable message width
        max_message_height: Most rows the message field may show
        wrap_guard: Extra cells kept free beside the message field
            to absorb glyphs whose measured width is approximate
    """
    left_sidebar_width: int = 20
    right_sidebar_width: int = 20
    border_cells: int = 2
    padding_cells: int = 2
    app_top_margin: int = 1
    header_top_margin: int = 1
    sidebar_top_margin: int = 1
    status_height: int = 1
    min_center_width: int = 40
    min_search_width: int = 10
    min_input_width: int = 1
    max_message_height: int = 2
    wrap_guard: int = 2

    # Header
    logo_glyph: str = '\uf489'
    channel_name: str = '#general'
    divider_glyph: str = '|'
    topic: str = 'TOPIC: Discussion'
    cluster_margin: int = 1
    bell_glyph: str = '\uf0f3'
    info_glyph: str = '\uf05a'

    # Search field
    search_prompt: str = '\uf002 '
    search_placeholder: str = 'Search'
    search_char_limit: int = 156

    # Message field
    message_prompt: str = '> '
    message_icons: str = ' \uee49 \U000F0066'
    message_placeholder: str = 'Type a Message or command (use / for actions)'

    status_text: str = 'MESSAGE-BUFFER'
    loading_text: str = 'Loading...'
    title: str = 'Chat Shell'

    blink_interval: float = 0.53
    palette: Palette = field(default_factory=Palette)

    def with_overrides(self, **changes):
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_CONFIG = ShellConfig()
