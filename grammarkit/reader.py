"""Building grammars from documents.

This package doesn't read any particular document format itself. A reader is
anything with a `read` method that takes a source and the reader options and
makes the same `GrammarBuilder` calls you would make by hand. `parse` glues a
reader to the resolver.

Whatever a reader raises (a malformed document, an attribute it doesn't know
about in strict mode) comes straight out of `parse`; we don't look at it.
"""

import typing

from .grammar import Grammar, GrammarBuilder
from .options import ParserOption, ReaderOption, split_options


class DocumentReader(typing.Protocol):
    def read(self, source: typing.Any, options: frozenset[ReaderOption]) -> GrammarBuilder: ...


def parse(reader: DocumentReader, source: typing.Any, *options: ParserOption) -> Grammar:
    """Read a grammar from `source` with `reader` and resolve it."""
    reader_options, resolution_options = split_options(options)
    builder = reader.read(source, reader_options)
    return builder.build(*resolution_options)
