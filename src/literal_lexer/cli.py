"""
Command-line entry point.

    literal-lexer GRAMMAR SOURCE [--tie-break POLICY] [--dump-automaton]
                  [--format table|csv] [--log-level LEVEL]
                  [--encoding ENC]

Tokens are written to stdout; the automaton dump, lexical error notices and
fatal errors go to stderr. Exit code 0 on success (lexical errors included),
1 on bad arguments, unreadable input or any other failure.
"""

import argparse
import sys
from typing import List, Optional

from literal_lexer.config import LexerConfig
from literal_lexer.errors import ErrorHandler, LexerError
from literal_lexer.grammar import load_rules, read_source
from literal_lexer.output import format_token_table, format_transition_table, tokens_to_dataframe
from literal_lexer.pipeline import compile_rules
from literal_lexer.policies import TIE_BREAK_POLICIES
from literal_lexer.scanner import Scanner
from literal_lexer.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="literal-lexer",
        description="Tokenize a source file with a minimized DFA built from literal grammar rules.")
    parser.add_argument('grammar', help='Grammar file, one "CATEGORY -> pattern" rule per line')
    parser.add_argument('source', help='Source text file to tokenize')
    parser.add_argument('--tie-break', choices=sorted(TIE_BREAK_POLICIES), default=None,
                        help='Policy resolving rules that accept the same string')
    parser.add_argument('--dump-automaton', action='store_true',
                        help='Write the minimized transition table to stderr')
    parser.add_argument('--format', choices=['table', 'csv'], default='table',
                        help='Token output format')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level for diagnostics')
    parser.add_argument('--encoding', default='utf-8',
                        help='Text encoding of the grammar and source files (default: utf-8)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.log_level:
        setup_logging(log_level=args.log_level)

    try:
        config = LexerConfig.from_env()
        if args.tie_break:
            config.tie_break = args.tie_break
        if args.dump_automaton:
            config.dump_automaton = True

        rules = load_rules(args.grammar, encoding=args.encoding)
        lines = read_source(args.source, encoding=args.encoding)

        dfa = compile_rules(rules, config)
        if config.dump_automaton:
            print(format_transition_table(dfa), file=sys.stderr)

        error_handler = ErrorHandler()
        scanner = Scanner(dfa, whitespace=config.whitespace, error_handler=error_handler)
        tokens = list(scanner.scan(lines))
    except LexerError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.format == 'csv':
        tokens_to_dataframe(tokens).to_csv(sys.stdout, index=False)
    else:
        print(format_token_table(tokens))

    if error_handler.has_errors():
        for notice in error_handler.get_formatted_errors():
            print(notice, file=sys.stderr)
        logger.info(f"Scan finished with {len(error_handler.get_errors())} lexical errors")
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
