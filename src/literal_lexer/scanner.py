"""
Longest-match scanner driven by a minimized DFA.

Scanning is line independent. Within a line the scanner alternates
between skipping whitespace and walking the automaton from its start
state as far as transitions allow, remembering the last accepting
position. The longest accepted prefix becomes a token; when nothing was
accepted the offending character is reported and skipped.
"""

from typing import Iterable, Iterator, List, Optional

from literal_lexer.errors import ErrorHandler, LexicalError
from literal_lexer.matcher.dfa import DFA, FAIL_STATE
from literal_lexer.tokens import Token
from literal_lexer.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_WHITESPACE = " \t"


class Scanner:
    """
    Tokenizer over a read-only DFA.

    Args:
        dfa: Minimized automaton; never mutated
        whitespace: Characters separating tokens, never reported
        error_handler: Collects lexical errors; a fresh one is created if omitted
    """

    def __init__(self, dfa: DFA, whitespace: str = DEFAULT_WHITESPACE,
                 error_handler: Optional[ErrorHandler] = None):
        self.dfa = dfa
        self.whitespace = frozenset(whitespace)
        self.error_handler = error_handler if error_handler is not None else ErrorHandler()

    def scan(self, lines: Iterable[str]) -> Iterator[Token]:
        """Scan ``lines`` (line terminators are stripped) and yield tokens in order."""
        for lineno, line in enumerate(lines, start=1):
            yield from self.scan_line(line.rstrip("\n").rstrip("\r"), lineno)

    def tokenize(self, text: str) -> List[Token]:
        return list(self.scan(text.split("\n")))

    def scan_line(self, line: str, lineno: int) -> Iterator[Token]:
        """Scan a single line (without its terminator)."""
        pos = 0
        length = len(line)
        while pos < length:
            if line[pos] in self.whitespace:
                pos += 1
                continue

            match_end, category = self._longest_match(line, pos)
            if category is not None:
                yield Token(lineno, category, line[pos:match_end + 1])
                pos = match_end + 1
            else:
                self._report(lineno, pos, line[pos])
                pos += 1

    def _longest_match(self, line: str, pos: int):
        """Walk the DFA from ``pos``; return (last accepting index, category) or (-1, None)."""
        states = self.dfa.states
        state = self.dfa.start
        last_accept = -1
        last_category = None

        index = pos
        while index < len(line):
            state = states[state].next_state(line[index])
            if state == FAIL_STATE:
                break
            category = states[state].category
            if category is not None:
                last_accept = index
                last_category = category
            index += 1

        return last_accept, last_category

    def _report(self, lineno: int, pos: int, char: str) -> None:
        error = LexicalError(line=lineno, column=pos + 1, character=char)
        self.error_handler.add_error(error)
        logger.warning(str(error))
