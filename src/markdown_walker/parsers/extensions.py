#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markdown_walker/parsers/extensions.py
"""Mistune plugins for syntax extensions mistune does not ship.

Each plugin is a callable taking the ``mistune.Markdown`` instance, like the
plugins bundled with mistune. Plugins that need configuration are built by a
factory function returning the plugin.

Plugins
-------
underline
    ``__text__`` as underline instead of strong emphasis
spoiler
    ``||text||`` spoilered text
wiki_link
    ``[[target]]``, ``[[url|title]]`` and ``[[title|url]]`` wiki links
shortcode
    ``:name:`` emoji shortcodes
multiline_block_quote
    block quotes fenced by lines of three or more ``>``
www_autolink
    bare ``www.`` hosts as links
email_autolink
    bare email addresses as ``mailto:`` links
math
    ``$...$``, ``$$...$$`` and ``$`...`$`` math, recording the syntax used

"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import TYPE_CHECKING, Any, Callable, Optional

from mistune.plugins.math import BLOCK_MATH_PATTERN, parse_block_math
from mistune.util import escape_url

from markdown_walker.constants import SHORTCODE_ALIASES, SHORTCODE_MIN_CODEPOINT, TAGFILTER_TAGS

if TYPE_CHECKING:
    from mistune.block_parser import BlockParser
    from mistune.core import BlockState, InlineState
    from mistune.inline_parser import InlineParser
    from mistune.markdown import Markdown

logger = logging.getLogger(__name__)

__all__ = [
    "email_autolink",
    "filtered_tag_name",
    "math",
    "multiline_block_quote",
    "resolve_shortcode",
    "shortcode",
    "spoiler",
    "underline",
    "wiki_link",
    "www_autolink",
]

UNDERLINE_PATTERN = r"__(?=[^\s_])"
SPOILER_PATTERN = r"\|\|(?=[^\s|])"
WIKI_LINK_PATTERN = r"\[\[(?P<wiki_body>[^\[\]\n]+)\]\]"
SHORTCODE_PATTERN = r":(?P<shortcode_name>[\w+-]+):"
WWW_AUTOLINK_PATTERN = r"""www\.[^\s<]+[^<.,:;"')\]\s]"""
EMAIL_AUTOLINK_PATTERN = r"[a-zA-Z0-9][a-zA-Z0-9._+-]*@[a-zA-Z0-9_-]+(?:\.[a-zA-Z0-9_-]+)+"
MULTILINE_BLOCK_QUOTE_PATTERN = r"^(?P<mbq_indent> {0,3})(?P<mbq_fence>>{3,})[ \t]*$"

DISPLAY_MATH_PATTERN = r"\$\$(?P<display_math_text>(?:[^$\\]|\\.)*?)\$\$"
CODE_MATH_PATTERN = r"\$(?P<backtick_math_marker>`+)(?P<backtick_math_text>[\s\S]*?)(?P=backtick_math_marker)\$"
DOLLAR_MATH_PATTERN = r"\$(?!\$)(?!\s)(?P<math_text>(?:[^$\\\n]|\\.)+?)\$(?!\d)"

_HTML_TAG_NAME = re.compile(r"<\s*/?\s*([A-Za-z][A-Za-z0-9-]*)")
# characters that may not directly precede a ``www.`` autolink
_WWW_BLOCKERS = frozenset("._-/:@")


def _find_closing(src: str, start: int, marker: str) -> Optional[int]:
    """Return the index of the closing ``marker`` after ``start``, or None.

    A closer must follow a non-space character and must not be the start of a
    longer run of the marker character.
    """
    end = src.find(marker, start)
    while end != -1:
        after = end + len(marker)
        longer_run = after < len(src) and src[after] == marker[0]
        if end > start and not src[end - 1].isspace() and not longer_run:
            return end
        end = src.find(marker, end + 1)
    return None


def _render_inline(inline: InlineParser, state: InlineState, text: str) -> list[dict[str, Any]]:
    new_state = state.copy()
    new_state.src = text
    return inline.render(new_state)


# ---------------------------------------------------------------------------
# Underline
# ---------------------------------------------------------------------------


def parse_underline(inline: InlineParser, m: re.Match[str], state: InlineState) -> Optional[int]:
    start = m.start()
    if start > 0 and (state.src[start - 1].isalnum() or state.src[start - 1] == "_"):
        return None

    end = _find_closing(state.src, m.end(), "__")
    if end is None:
        return None

    children = _render_inline(inline, state, state.src[m.end() : end])
    state.append_token({"type": "underline", "children": children})
    return end + 2


def underline(md: Markdown) -> None:
    """Parse ``__text__`` as underline.

    Registered ahead of emphasis so that double underscores never reach the
    strong emphasis rule; ``**text**`` is still strong.
    """
    md.inline.register("underline", UNDERLINE_PATTERN, parse_underline, before="emphasis")


# ---------------------------------------------------------------------------
# Spoiler
# ---------------------------------------------------------------------------


def parse_spoiler(inline: InlineParser, m: re.Match[str], state: InlineState) -> Optional[int]:
    end = _find_closing(state.src, m.end(), "||")
    if end is None:
        return None

    children = _render_inline(inline, state, state.src[m.end() : end])
    state.append_token({"type": "spoiler", "children": children})
    return end + 2


def spoiler(md: Markdown) -> None:
    """Parse Discord-style ``||spoiler||`` text."""
    md.inline.register("spoiler", SPOILER_PATTERN, parse_spoiler, before="link")


# ---------------------------------------------------------------------------
# Wiki links
# ---------------------------------------------------------------------------


def wiki_link(title_after_pipe: bool = True, title_before_pipe: bool = False) -> Callable[[Markdown], None]:
    """Build the wiki link plugin.

    Parameters
    ----------
    title_after_pipe : bool, default True
        Read ``[[url|title]]``
    title_before_pipe : bool, default False
        Read ``[[title|url]]``; ignored when ``title_after_pipe`` is set

    Returns
    -------
    callable
        Mistune plugin

    """

    def parse_wiki_link(inline: InlineParser, m: re.Match[str], state: InlineState) -> Optional[int]:
        body = m.group("wiki_body")
        if state.in_link:
            inline.process_text(m.group(0), state)
            return m.end()

        first, pipe, second = body.partition("|")
        if not pipe:
            url = title = body.strip()
        elif title_after_pipe:
            url, title = first.strip(), second.strip()
        elif title_before_pipe:
            title, url = first.strip(), second.strip()
        else:
            return None

        if not url:
            return None
        state.append_token(
            {
                "type": "wiki_link",
                "children": [{"type": "text", "raw": title or url}],
                "attrs": {"url": url},
            }
        )
        return m.end()

    def plugin(md: Markdown) -> None:
        md.inline.register("wiki_link", WIKI_LINK_PATTERN, parse_wiki_link, before="link")

    return plugin


# ---------------------------------------------------------------------------
# Shortcodes
# ---------------------------------------------------------------------------


def resolve_shortcode(name: str) -> Optional[str]:
    """Return the emoji for shortcode ``name``, or None if it is unknown.

    Names are looked up in ``SHORTCODE_ALIASES`` first, then as Unicode
    character names (``:rocket:`` is ``ROCKET``). Characters below
    ``SHORTCODE_MIN_CODEPOINT`` are not emoji and do not resolve.
    """
    alias = SHORTCODE_ALIASES.get(name)
    if alias is not None:
        return alias

    try:
        char = unicodedata.lookup(name.replace("_", " ").replace("-", " ").upper())
    except KeyError:
        return None
    if ord(char[0]) < SHORTCODE_MIN_CODEPOINT:
        return None
    return char


def parse_shortcode(inline: InlineParser, m: re.Match[str], state: InlineState) -> Optional[int]:
    name = m.group("shortcode_name")
    emoji = resolve_shortcode(name)
    if emoji is None:
        logger.debug("Unknown shortcode :%s:", name)
        return None
    state.append_token({"type": "short_code", "attrs": {"code": name, "emoji": emoji}})
    return m.end()


def shortcode(md: Markdown) -> None:
    """Replace ``:name:`` emoji shortcodes; unknown names stay text."""
    md.inline.register("short_code", SHORTCODE_PATTERN, parse_shortcode)


# ---------------------------------------------------------------------------
# Multiline block quotes
# ---------------------------------------------------------------------------


def parse_multiline_block_quote(block: BlockParser, m: re.Match[str], state: BlockState) -> int:
    fence = m.group("mbq_fence")
    closing = re.compile(r"^ {0,3}>{%d,}[ \t]*$" % len(fence), re.M)

    content_start = state.find_line_end_at(m.start())
    close = closing.search(state.src, content_start, state.cursor_max)
    if close is None:
        text = state.src[content_start : state.cursor_max]
        end_pos = state.cursor_max
    else:
        text = state.src[content_start : close.start()]
        end_pos = state.find_line_end_at(close.start())

    child = state.child_state(text)
    if state.depth() >= block.max_nested_level - 1:
        rules = [rule for rule in block.rules if rule not in ("multiline_block_quote", "block_quote", "list")]
    else:
        rules = block.rules
    block.parse(child, rules)

    state.append_token(
        {
            "type": "multiline_block_quote",
            "children": child.tokens,
            "attrs": {"fence_length": len(fence), "fence_offset": len(m.group("mbq_indent"))},
        }
    )
    return end_pos


def multiline_block_quote(md: Markdown) -> None:
    """Parse block quotes fenced by ``>>>`` lines.

    The closing fence is a line of at least as many ``>`` as the opening one.
    A fence that is never closed runs to the end of the document.
    """
    md.block.register(
        "multiline_block_quote",
        MULTILINE_BLOCK_QUOTE_PATTERN,
        parse_multiline_block_quote,
        before="block_quote",
    )
    md.block.insert_rule(md.block.list_rules, "multiline_block_quote", before="block_quote")


# ---------------------------------------------------------------------------
# www. autolinks
# ---------------------------------------------------------------------------


def parse_www_autolink(inline: InlineParser, m: re.Match[str], state: InlineState) -> Optional[int]:
    start = m.start()
    if start > 0 and (state.src[start - 1].isalnum() or state.src[start - 1] in _WWW_BLOCKERS):
        return None

    text = m.group(0)
    if state.in_link:
        inline.process_text(text, state)
        return m.end()
    state.append_token(
        {
            "type": "link",
            "children": [{"type": "text", "raw": text}],
            "attrs": {"url": escape_url("http://" + text)},
        }
    )
    return m.end()


def www_autolink(md: Markdown) -> None:
    """Link bare ``www.`` hosts, with an ``http://`` scheme."""
    md.inline.register("www_autolink", WWW_AUTOLINK_PATTERN, parse_www_autolink)


def parse_email_autolink(inline: InlineParser, m: re.Match[str], state: InlineState) -> Optional[int]:
    text = m.group(0)
    # the domain may not end with - or _
    if text[-1] in "-_":
        return None

    if state.in_link:
        inline.process_text(text, state)
        return m.end()
    state.append_token(
        {
            "type": "link",
            "children": [{"type": "text", "raw": text}],
            "attrs": {"url": escape_url("mailto:" + text)},
        }
    )
    return m.end()


def email_autolink(md: Markdown) -> None:
    """Link bare email addresses, with a ``mailto:`` scheme."""
    md.inline.register("email_autolink", EMAIL_AUTOLINK_PATTERN, parse_email_autolink)


# ---------------------------------------------------------------------------
# Math
# ---------------------------------------------------------------------------


def parse_inline_math(inline: InlineParser, m: re.Match[str], state: InlineState) -> int:
    groups = m.groupdict()
    if groups.get("display_math_text") is not None:
        raw, dollar, display = groups["display_math_text"], True, True
    elif groups.get("backtick_math_text") is not None:
        raw, dollar, display = groups["backtick_math_text"], False, False
    else:
        raw, dollar, display = groups["math_text"], True, False

    state.append_token({"type": "inline_math", "raw": raw, "attrs": {"dollar": dollar, "display": display}})
    return m.end()


def math(dollars: bool = True, code: bool = True) -> Callable[[Markdown], None]:
    """Build the math plugin.

    Parameters
    ----------
    dollars : bool, default True
        Parse ``$...$`` spans, ``$$...$$`` display spans and ``$$`` blocks
    code : bool, default True
        Parse ``$`...`$`` spans

    Returns
    -------
    callable
        Mistune plugin

    """
    parts = []
    if dollars:
        parts.append(DISPLAY_MATH_PATTERN)
    if code:
        parts.append(CODE_MATH_PATTERN)
    if dollars:
        parts.append(DOLLAR_MATH_PATTERN)
    pattern = "|".join(parts)

    def plugin(md: Markdown) -> None:
        if dollars:
            md.block.register("block_math", BLOCK_MATH_PATTERN, parse_block_math, before="list")
        if pattern:
            md.inline.register("inline_math", pattern, parse_inline_math, before="codespan")

    return plugin


# ---------------------------------------------------------------------------
# Tag filter
# ---------------------------------------------------------------------------


def filtered_tag_name(html: str) -> Optional[str]:
    """Return the tag name if ``html`` opens or closes a filtered tag.

    Filtered tags are the raw HTML tags GitHub Flavored Markdown escapes
    (``<script>``, ``<iframe>``...), compared case-insensitively.
    """
    match = _HTML_TAG_NAME.match(html)
    if match is None:
        return None
    name = match.group(1).lower()
    if name not in TAGFILTER_TAGS:
        return None
    logger.debug("Tag filter escaped <%s>", name)
    return name
