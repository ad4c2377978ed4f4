"""Tests for the box-drawing primitives."""

from chat_shell import BoxSpec
from chat_shell.boxes import (
    NORMAL_BORDER,
    ROUNDED_BORDER,
    Block,
    Span,
    fit_line,
    join_horizontal,
    join_vertical,
    line_width,
    render_box,
    render_line,
)


def brackets(text):
    return f'[{text}]'


def plain_block(*rows):
    width = max(len(row) for row in rows)
    return Block(tuple(fit_line((Span(row),), width) for row in rows), width)


class TestSpan:
    """Tests for styled spans."""

    def test_unstyled(self):
        span = Span('hello')
        assert span.width == 5
        assert span.render() == 'hello'

    def test_styled_width_ignores_style(self):
        """Test that width is measured on the plain text."""
        span = Span('hi', brackets)
        assert span.width == 2
        assert span.render() == '[hi]'

    def test_empty_styled_span_renders_nothing(self):
        assert Span('', brackets).render() == ''


class TestFitLine:
    """Tests for fit_line."""

    def test_pads_short_line(self):
        line = fit_line((Span('ab'),), 5)
        assert line_width(line) == 5
        assert render_line(line) == 'ab   '

    def test_truncates_long_line(self):
        line = fit_line((Span('abc'), Span('def')), 4)
        assert render_line(line) == 'abcd'

    def test_keeps_styles_when_truncating(self):
        line = fit_line((Span('abc', brackets),), 2)
        assert render_line(line) == '[ab]'

    def test_wide_character_boundary(self):
        """Test that a wide character that would straddle the edge is dropped."""
        line = fit_line((Span('a日'),), 2)
        assert line_width(line) == 2
        assert render_line(line) == 'a '

    def test_fill_style(self):
        line = fit_line((Span('a'),), 3, fill=Span('', brackets))
        assert render_line(line) == 'a[  ]'

    def test_zero_width(self):
        assert fit_line((Span('abc'),), 0) == ()


class TestRenderBox:
    """Tests for render_box."""

    def test_normal_border(self):
        """Test a bordered, padded box."""
        spec = BoxSpec(content_width=3, content_height=1, border_cells=2, padding_cells=2)
        block = render_box([(Span('ab'),)], spec, NORMAL_BORDER)
        assert block.render().split('\n') == [
            '┌─────┐',
            '│ ab  │',
            '└─────┘',
        ]
        assert block.width == spec.rendered_width
        assert block.height == spec.rendered_height

    def test_rounded_border(self):
        spec = BoxSpec(content_width=1, content_height=1, border_cells=2)
        block = render_box([], spec, ROUNDED_BORDER)
        assert block.render().split('\n') == ['╭─╮', '│ │', '╰─╯']

    def test_margin_rows(self):
        """Test that top margin adds blank rows of the rendered width."""
        spec = BoxSpec(content_width=2, content_height=1, border_cells=2, margin_cells=1)
        block = render_box([], spec, NORMAL_BORDER)
        assert block.render().split('\n')[0] == '    '
        assert block.height == 4

    def test_content_truncated_to_height(self):
        spec = BoxSpec(content_width=3, content_height=1)
        block = render_box([(Span('one'),), (Span('two'),)], spec)
        assert block.render() == 'one'

    def test_zero_height_box(self):
        """Test that a box with no interior still draws its border."""
        spec = BoxSpec(content_width=2, content_height=0, border_cells=2, padding_cells=2)
        block = render_box([], spec, NORMAL_BORDER)
        assert block.render().split('\n') == ['┌────┐', '└────┘']

    def test_border_style(self):
        spec = BoxSpec(content_width=1, content_height=0, border_cells=2)
        block = render_box([], spec, NORMAL_BORDER, border_style=brackets)
        assert block.render() == '[┌─┐]\n[└─┘]'

    def test_unbordered_padding(self):
        spec = BoxSpec(content_width=4, content_height=1, padding_cells=2)
        block = render_box([(Span('abc'),)], spec)
        assert block.render() == ' abc  '


class TestJoin:
    """Tests for block joins."""

    def test_join_horizontal_top_aligned(self):
        """Test that shorter blocks are padded below."""
        tall = plain_block('a', 'b', 'c')
        short = plain_block('xy')
        joined = join_horizontal(tall, short)
        assert joined.width == 3
        assert joined.render().split('\n') == ['axy', 'b  ', 'c  ']

    def test_join_vertical_left_aligned(self):
        """Test that narrower blocks are padded on the right."""
        joined = join_vertical(plain_block('abc'), plain_block('d'))
        assert joined.width == 3
        assert joined.render().split('\n') == ['abc', 'd  ']

    def test_empty_joins(self):
        assert join_horizontal().height == 0
        assert join_vertical().width == 0
