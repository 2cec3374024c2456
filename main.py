"""
Main Application (main.py):
Builds a minimized DFA from a grammar file and tokenizes a source file.

    python main.py grammar.txt source.txt
"""

import sys

from literal_lexer.cli import main

if __name__ == "__main__":
    sys.exit(main())
