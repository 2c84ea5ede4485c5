"""Message template parser module.

This module provides the MessageParser class and related parsing utilities
organized into focused submodules.

Module Organization:
- core.py: MessageParser class and parse()/parse_partial() entry points
- primitives.py: Basic parsers (argument names, identifiers, integers, selectors)
- whitespace.py: Whitespace skipping and clause-body layout trimming
- rules.py: All grammar rules (literals, patterns, arguments, clauses)

Public API:
    MessageParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from icumessage.syntax.parser.core import MessageParser
from icumessage.syntax.parser.rules import ParseContext

__all__ = ["MessageParser", "ParseContext"]
