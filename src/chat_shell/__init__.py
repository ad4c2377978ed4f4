"""
Chat Shell

A three-column chat-application shell rendered in the terminal with the Blessed
library. Provides a responsive layout solver, box-drawing primitives, focusable
input fields and a controller that composes them into full-screen frames.
"""

__version__ = '0.1.0'

from .config import DEFAULT_CONFIG, Palette, ShellConfig
from .layout import (
    BoxSpec,
    Heights,
    Layout,
    TerminalFrame,
    Widths,
    solve_heights,
    solve_layout,
    solve_widths,
)
from .widgets import MessageField, SearchField
from .controller import FocusState, ShellController, accent_for

__all__ = [
    'DEFAULT_CONFIG',
    'Palette',
    'ShellConfig',
    'BoxSpec',
    'Heights',
    'Layout',
    'TerminalFrame',
    'Widths',
    'solve_heights',
    'solve_layout',
    'solve_widths',
    'MessageField',
    'SearchField',
    'FocusState',
    'ShellController',
    'accent_for',
]
