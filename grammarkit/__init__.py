"""Model formal grammars as terms, and resolve them into grammars you can walk.

    from grammarkit import grammar, literal, non_terminal, one_or_more, characters_of_set

    g = (
        grammar("numbers")
        .production(
            "list",
            non_terminal("number"),
            non_terminal("number") + literal(",") + non_terminal("list"),
        )
        .production("number", one_or_more(characters_of_set("DIGIT")))
        .build()
    )

See `grammarkit.grammar` for building and resolving, `grammarkit.terms` for
the terms themselves, and `grammarkit.transform` for walking the result.
"""

from .errors import (
    DuplicateProductionError,
    GrammarConstructionError,
    GrammarError,
    ResolutionError,
    RootlessGrammarError,
    UndefinedProductionError,
    UnknownProductionError,
    UnusedProductionError,
)
from .grammar import Grammar, GrammarBuilder, Production, grammar
from .options import ParserOption, ReaderOption, ResolutionOption, split_options
from .reader import DocumentReader, parse
from .resolver import resolve
from .terms import (
    EPSILON,
    Alternatives,
    CharacterSet,
    Epsilon,
    Literal,
    NonTerminal,
    Optional,
    Repetition,
    Sequence,
    Term,
    any_character,
    at_least,
    case_insensitive,
    characters_of_set,
    epsilon,
    literal,
    non_terminal,
    one_of,
    one_or_more,
    optional,
    repeat,
    repeat_exactly,
    sequence,
    zero_or_more,
)
from .transform import GrammarVisitor, ProductionTransformation, TermTransformation, TermVisitor
