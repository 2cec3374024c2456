"""
Grammar rule loading and source text reading.

Grammar files hold one rule per line in the form ``CATEGORY -> pattern``.
The line is split on the first ``->``; both sides are trimmed of spaces
and tabs. Lines without an arrow or with an empty side are ignored.
"""

from typing import Iterable, List, Optional

from literal_lexer.errors import GrammarSourceError, SourceTextError
from literal_lexer.tokens import PatternRule, TokenCategory
from literal_lexer.utils.logging_config import get_logger

logger = get_logger(__name__)

RULE_SEPARATOR = "->"
_TRIM = " \t"


def parse_rule(line: str) -> Optional[PatternRule]:
    """Parse one grammar line; return None when the line holds no rule."""
    text = line.rstrip("\r\n")
    head, arrow, tail = text.partition(RULE_SEPARATOR)
    if not arrow:
        return None
    name = head.strip(_TRIM)
    pattern = tail.strip(_TRIM)
    if not name or not pattern:
        return None

    category = TokenCategory.from_name(name)
    if category is TokenCategory.UNKNOWN and name != TokenCategory.UNKNOWN.value:
        logger.warning(f"Unknown token category '{name}' for pattern {pattern!r}, using UNKNOWN")
    return PatternRule(category, pattern)


def parse_rules(lines: Iterable[str]) -> List[PatternRule]:
    """Parse grammar lines into rules, preserving declaration order."""
    rules = []
    for lineno, line in enumerate(lines, start=1):
        rule = parse_rule(line)
        if rule is None:
            if line.strip():
                logger.debug(f"Ignoring grammar line {lineno}: {line.rstrip()!r}")
            continue
        rules.append(rule)
    return rules


def load_rules(path: str, encoding: str = "utf-8") -> List[PatternRule]:
    """
    Read and parse a grammar file.

    Raises:
        GrammarSourceError: If the file cannot be opened or decoded
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            lines = [line.rstrip("\n") for line in f]
    except UnicodeDecodeError as e:
        raise GrammarSourceError(path, f"not valid {encoding}: {e}", operation="decode") from e
    except (OSError, LookupError) as e:
        raise GrammarSourceError(path, str(e)) from e

    rules = parse_rules(lines)
    logger.info(f"Loaded {len(rules)} rules from {path}")
    return rules


def read_source(path: str, encoding: str = "utf-8") -> List[str]:
    """
    Read a source file as a list of lines without terminators.

    Raises:
        SourceTextError: If the file cannot be opened or decoded
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            return [line.rstrip("\n") for line in f]
    except UnicodeDecodeError as e:
        raise SourceTextError(path, f"not valid {encoding}: {e}", operation="decode") from e
    except (OSError, LookupError) as e:
        raise SourceTextError(path, str(e)) from e
