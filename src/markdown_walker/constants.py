#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for markdown_walker.

This module centralizes hardcoded values used across the package:

1. Extension Defaults - The fixed syntax extension set
2. Tag Filter - Raw HTML tags escaped by the tag filter extension
3. Shortcodes - Emoji shortcode aliases
4. CLI - Exit codes and environment variables
5. Logging - Log formats
"""

from __future__ import annotations

# =============================================================================
# Extension Defaults
# =============================================================================

DEFAULT_FRONT_MATTER_DELIMITER = "---"

# =============================================================================
# Tag Filter
# =============================================================================

# GitHub Flavored Markdown "disallowed raw HTML" tag list
TAGFILTER_TAGS = frozenset(
    {
        "title",
        "textarea",
        "style",
        "xmp",
        "iframe",
        "noembed",
        "noframes",
        "script",
        "plaintext",
    }
)

# =============================================================================
# Shortcodes
# =============================================================================

# Codepoints below this are never treated as emoji when resolving a shortcode
# through Unicode character names (keeps ":a:" or ":x:" style text intact).
SHORTCODE_MIN_CODEPOINT = 0x2100

# Common gemoji aliases whose names differ from the Unicode character name
SHORTCODE_ALIASES: dict[str, str] = {
    "+1": "\U0001f44d",
    "-1": "\U0001f44e",
    "thumbsup": "\U0001f44d",
    "thumbsdown": "\U0001f44e",
    "smile": "\U0001f604",
    "smiley": "\U0001f603",
    "grinning": "\U0001f600",
    "laughing": "\U0001f606",
    "joy": "\U0001f602",
    "wink": "\U0001f609",
    "blush": "\U0001f60a",
    "heart": "❤️",
    "broken_heart": "\U0001f494",
    "heart_eyes": "\U0001f60d",
    "sunglasses": "\U0001f60e",
    "cry": "\U0001f622",
    "sob": "\U0001f62d",
    "angry": "\U0001f620",
    "thinking": "\U0001f914",
    "tada": "\U0001f389",
    "fire": "\U0001f525",
    "sparkles": "✨",
    "star": "⭐",
    "zap": "⚡",
    "warning": "⚠️",
    "white_check_mark": "✅",
    "heavy_check_mark": "✔️",
    "x": "❌",
    "question": "❓",
    "exclamation": "❗",
    "bulb": "\U0001f4a1",
    "memo": "\U0001f4dd",
    "pencil": "\U0001f4dd",
    "book": "\U0001f4d6",
    "bug": "\U0001f41b",
    "wrench": "\U0001f527",
    "hammer": "\U0001f528",
    "lock": "\U0001f512",
    "key": "\U0001f511",
    "eyes": "\U0001f440",
    "wave": "\U0001f44b",
    "clap": "\U0001f44f",
    "pray": "\U0001f64f",
    "muscle": "\U0001f4aa",
    "ok_hand": "\U0001f44c",
    "raised_hands": "\U0001f64c",
    "point_right": "\U0001f449",
    "point_left": "\U0001f448",
    "100": "\U0001f4af",
    "boom": "\U0001f4a5",
    "coffee": "☕",
    "beer": "\U0001f37a",
    "pizza": "\U0001f355",
    "cake": "\U0001f370",
    "sun_with_face": "\U0001f31e",
    "sunny": "☀️",
    "cloud": "☁️",
    "umbrella": "☔",
    "snowflake": "❄️",
    "earth_americas": "\U0001f30e",
    "ship": "\U0001f6a2",
    "checkered_flag": "\U0001f3c1",
    "construction": "\U0001f6a7",
    "no_entry": "⛔",
    "rotating_light": "\U0001f6a8",
}

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_WALK_ERROR = 7

ENV_LOG_LEVEL = "MARKDOWN_WALKER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

# =============================================================================
# Logging
# =============================================================================

LOG_FORMAT = "%(levelname)s: %(message)s"
TRACE_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
