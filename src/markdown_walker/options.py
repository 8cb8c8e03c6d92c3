#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Extension configuration for the Markdown parser.

``ExtensionOptions`` selects which syntax extensions the parser recognizes on
top of CommonMark. ``WALKER_EXTENSIONS`` is the fixed configuration used by
``MarkdownWalker.from_markdown``: every extension enabled and front matter
off. ``FRONT_MATTER_EXTENSIONS`` adds YAML front matter delimited by ``---``
for callers that read it.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, Callable

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mistune.plugins import def_list as mistune_def_list
from mistune.plugins import footnotes as mistune_footnotes
from mistune.plugins import formatting as mistune_formatting
from mistune.plugins import math as mistune_math
from mistune.plugins import table as mistune_table
from mistune.plugins import task_lists as mistune_task_lists
from mistune.plugins import url as mistune_url

from markdown_walker.constants import DEFAULT_FRONT_MATTER_DELIMITER
from markdown_walker.exceptions import ValidationError
from markdown_walker.parsers import extensions

MistunePlugin = Callable[[Any], None]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ExtensionOptions(CloneFrozenMixin):
    """Syntax extensions recognized by the Markdown parser.

    Every extension defaults to enabled. Disabling one makes its syntax parse
    as plain CommonMark.

    Parameters
    ----------
    autolink : bool, default True
        Link bare ``http(s)://`` URLs, ``www.`` hosts and email addresses
    description_lists : bool, default True
        Parse ``term`` / ``: details`` description lists
    footnotes : bool, default True
        Parse ``[^label]`` references and their definitions
    math_code : bool, default True
        Parse ``$`...`$`` math spans
    math_dollars : bool, default True
        Parse ``$...$`` and ``$$...$$`` math
    multiline_block_quotes : bool, default True
        Parse block quotes fenced by ``>>>`` lines
    shortcodes : bool, default True
        Replace ``:name:`` emoji shortcodes
    spoiler : bool, default True
        Parse ``||spoiler||`` text
    strikethrough : bool, default True
        Parse ``~~deleted~~`` text
    subscript : bool, default True
        Parse ``~sub~`` text
    superscript : bool, default True
        Parse ``^sup^`` text
    table : bool, default True
        Parse pipe tables
    tagfilter : bool, default True
        Escape raw HTML tags that are unsafe to pass through
    tasklist : bool, default True
        Parse ``[ ]`` / ``[x]`` list items as task items
    underline : bool, default True
        Parse ``__text__`` as underline rather than strong emphasis
    wikilinks_title_after_pipe : bool, default True
        Parse ``[[url|title]]`` wiki links
    wikilinks_title_before_pipe : bool, default True
        Parse ``[[title|url]]`` wiki links; ``[[url|title]]`` wins when both are set
    front_matter_delimiter : str or None, default None
        Delimiter line of a leading front matter block; None disables it

    """

    autolink: bool = field(default=True, metadata={"help": "Link bare URLs, www. hosts and email addresses"})
    description_lists: bool = field(default=True, metadata={"help": "Parse description lists"})
    footnotes: bool = field(default=True, metadata={"help": "Parse footnote references and definitions"})
    math_code: bool = field(default=True, metadata={"help": "Parse $`...`$ math spans"})
    math_dollars: bool = field(default=True, metadata={"help": "Parse $...$ and $$...$$ math"})
    multiline_block_quotes: bool = field(default=True, metadata={"help": "Parse >>> fenced block quotes"})
    shortcodes: bool = field(default=True, metadata={"help": "Replace :name: emoji shortcodes"})
    spoiler: bool = field(default=True, metadata={"help": "Parse ||spoiler|| text"})
    strikethrough: bool = field(default=True, metadata={"help": "Parse ~~strikethrough~~ text"})
    subscript: bool = field(default=True, metadata={"help": "Parse ~subscript~ text"})
    superscript: bool = field(default=True, metadata={"help": "Parse ^superscript^ text"})
    table: bool = field(default=True, metadata={"help": "Parse pipe tables"})
    tagfilter: bool = field(default=True, metadata={"help": "Escape unsafe raw HTML tags"})
    tasklist: bool = field(default=True, metadata={"help": "Parse task list items"})
    underline: bool = field(default=True, metadata={"help": "Parse __underline__ text"})
    wikilinks_title_after_pipe: bool = field(default=True, metadata={"help": "Parse [[url|title]] wiki links"})
    wikilinks_title_before_pipe: bool = field(default=True, metadata={"help": "Parse [[title|url]] wiki links"})
    front_matter_delimiter: str | None = field(
        default=None,
        metadata={"help": "Front matter delimiter line (None disables front matter)"},
    )

    def __post_init__(self) -> None:
        """Validate the front matter delimiter.

        Raises
        ------
        ValidationError
            If the delimiter is empty or contains whitespace

        """
        delimiter = self.front_matter_delimiter
        if delimiter is None:
            return
        if not isinstance(delimiter, str) or not delimiter or any(c.isspace() for c in delimiter):
            raise ValidationError(
                f"front_matter_delimiter must be a non-empty string without whitespace, got {delimiter!r}",
                parameter_name="front_matter_delimiter",
                parameter_value=delimiter,
            )

    @property
    def any_math(self) -> bool:
        return self.math_dollars or self.math_code

    @property
    def any_wikilinks(self) -> bool:
        return self.wikilinks_title_after_pipe or self.wikilinks_title_before_pipe

    def plugins(self) -> list[MistunePlugin]:
        """Return the mistune plugins implementing the enabled extensions, in load order."""
        plugins: list[MistunePlugin] = []
        if self.strikethrough:
            plugins.append(mistune_formatting.strikethrough)
        if self.subscript:
            plugins.append(mistune_formatting.subscript)
        if self.superscript:
            plugins.append(mistune_formatting.superscript)
        if self.underline:
            plugins.append(extensions.underline)
        if self.spoiler:
            plugins.append(extensions.spoiler)
        if self.table:
            plugins.extend([mistune_table.table, mistune_table.table_in_quote, mistune_table.table_in_list])
        if self.footnotes:
            plugins.append(mistune_footnotes.footnotes)
        if self.tasklist:
            plugins.append(mistune_task_lists.task_lists)
        if self.description_lists:
            plugins.append(mistune_def_list.def_list)
        if self.any_math:
            plugins.append(extensions.math(dollars=self.math_dollars, code=self.math_code))
        if self.math_dollars:
            # block math rule exists only with dollar math
            plugins.extend([mistune_math.math_in_quote, mistune_math.math_in_list])
        if self.multiline_block_quotes:
            plugins.append(extensions.multiline_block_quote)
        if self.any_wikilinks:
            plugins.append(
                extensions.wiki_link(
                    title_after_pipe=self.wikilinks_title_after_pipe,
                    title_before_pipe=self.wikilinks_title_before_pipe,
                )
            )
        if self.shortcodes:
            plugins.append(extensions.shortcode)
        if self.autolink:
            plugins.extend([mistune_url.url, extensions.www_autolink, extensions.email_autolink])
        return plugins


WALKER_EXTENSIONS = ExtensionOptions()
FRONT_MATTER_EXTENSIONS = WALKER_EXTENSIONS.create_updated(front_matter_delimiter=DEFAULT_FRONT_MATTER_DELIMITER)
