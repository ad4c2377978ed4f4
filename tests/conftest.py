"""Shared fixtures for chat shell tests."""

import io

import pytest
from blessed import Terminal
from chat_shell import ShellController


class TaggingTerminal:
    """Stands in for a blessed Terminal, wrapping styled text in readable tags."""

    width = 120
    height = 40
    does_styling = False
    home = ''
    clear_eos = ''

    def color(self, index):
        return lambda text: f'<{index}>{text}</{index}>'

    def on_color(self, index):
        return lambda text: f'<bg{index}>{text}</bg{index}>'

    @staticmethod
    def bold(text):
        return f'<b>{text}</b>'

    @staticmethod
    def reverse(text):
        return f'<r>{text}</r>'


@pytest.fixture
def plain_term():
    """A real Terminal with styling disabled."""
    return Terminal(stream=io.StringIO(), force_styling=None)


@pytest.fixture
def controller(plain_term):
    return ShellController(term=plain_term, register_resize_handler=False)


@pytest.fixture
def tagged_controller():
    return ShellController(term=TaggingTerminal(), register_resize_handler=False)
