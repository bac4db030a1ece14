# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

"""
Whitespace tokenizer for raster grid text files.

Tokens are pulled lazily line by line, so line breaks carry no meaning beyond
separating tokens and large grids are never split into one huge list.
"""

from typing import Iterator, Optional, TextIO, Tuple


class TokenStream:
    """
    Lazy stream of whitespace-delimited tokens with line tracking.

    ``first_line`` is the line number of the first line the handle will yield,
    used so error messages refer to the physical line in the file.
    """

    def __init__(self, handle: TextIO, first_line: int = 1) -> None:
        self._tokens = self._iter_tokens(handle, first_line)
        self._peeked: Optional[Tuple[str, int]] = None
        self.line_number = first_line

    @staticmethod
    def _iter_tokens(handle: TextIO, first_line: int) -> Iterator[Tuple[str, int]]:
        for line_number, line in enumerate(handle, start=first_line):
            for token in line.split():
                yield token, line_number

    def next(self) -> Optional[str]:
        """Return the next token, or None at end of stream."""
        if self._peeked is not None:
            token, self.line_number = self._peeked
            self._peeked = None
            return token
        item = next(self._tokens, None)
        if item is None:
            return None
        token, self.line_number = item
        return token

    def peek(self) -> Optional[str]:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = next(self._tokens, None)
        return None if self._peeked is None else self._peeked[0]

    def at_end(self) -> bool:
        return self.peek() is None
