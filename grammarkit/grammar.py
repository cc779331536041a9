"""Productions and grammars.

A grammar goes through two stages. First you get a `GrammarBuilder` from
`grammar()` and add productions to it:

    builder = grammar("arithmetic")
    builder.production("expression", non_terminal("term") + literal("+") + non_terminal("term"))
    builder.production("term", characters_of_set("DIGIT"))

and then you `build()` it, which checks the whole thing over and hands you an
immutable `Grammar`:

    g = builder.build()

The two are different types on purpose: a `Grammar` has no way to change, so
you can pass it around to as many threads as you like.

The first production you add is the root of the grammar. Every other
production needs to be reachable from it, unless you say otherwise with a
`ResolutionOption`.
"""

import dataclasses
import inspect
import types
import typing

from . import resolver, terms
from .errors import DuplicateProductionError, GrammarConstructionError, UnknownProductionError
from .options import ResolutionOption
from .transform import GrammarVisitor, ProductionTransformation

P = typing.TypeVar("P")
R = typing.TypeVar("R")


@dataclasses.dataclass(frozen=True)
class Production:
    """A named rule of a grammar, and its definition."""

    name: str
    definition: terms.Term
    grammar: "GrammarBuilder | Grammar" = dataclasses.field(compare=False, repr=False)
    location: str = dataclasses.field(default="<unknown>", compare=False, repr=False)

    @property
    def language(self) -> str:
        return self.grammar.language

    def transform(self, transformation: ProductionTransformation[P, R], param: P) -> R:
        return transformation.transform_production(param, self)

    def accept(self, visitor: GrammarVisitor):
        visitor.visit_production(self)


class GrammarBuilder:
    """A grammar under construction.

    Not safe to share between threads while you're building it; you build it,
    once, and then you call `build`.
    """

    _language: str
    _header: str
    _productions: dict[str, Production]
    _built: bool

    def __init__(self, language: str, header: str = ""):
        if not isinstance(language, str) or len(language) == 0:
            raise GrammarConstructionError(
                f"Language name must be a non-empty string, got {language!r}"
            )
        self._language = language
        self._header = header
        self._productions = {}
        self._built = False

    @property
    def language(self) -> str:
        return self._language

    @property
    def header(self) -> str:
        return self._header

    @header.setter
    def header(self, value: str):
        if self._built:
            raise GrammarConstructionError(
                f"Cannot change the header of {self._language}: the grammar has been built"
            )
        self._header = value

    def production(
        self, name: str, first: terms.Term, *alternatives: terms.Term
    ) -> "GrammarBuilder":
        """Add a production named `name` whose definition is a choice between
        `first` and `alternatives`.

        Raises `DuplicateProductionError` if there's already a production with
        that name.
        """
        if self._built:
            raise GrammarConstructionError(
                f"Cannot add production {name} to {self.language}: the grammar has been built"
            )
        if not isinstance(name, str) or len(name) == 0:
            raise GrammarConstructionError(
                f"Production name must be a non-empty string, got {name!r}"
            )

        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        location = (
            f"{caller.f_code.co_filename}:{caller.f_lineno}" if caller is not None else "<unknown>"
        )

        existing = self._productions.get(name)
        if existing is not None:
            raise DuplicateProductionError(name, existing.location, location)

        body = terms.one_of(first, *alternatives).add_to(terms.ProductionBody())
        self._productions[name] = Production(name, body.build(), self, location)
        return self

    def productions(self) -> list[Production]:
        return list(self._productions.values())

    def build(self, *options: ResolutionOption) -> "Grammar":
        """Resolve this grammar into a `Grammar`, or raise a `ResolutionError`."""
        grammar = resolver.resolve(self, options)
        self._built = True
        return grammar


def grammar(language: str, *, header: str = "") -> GrammarBuilder:
    """Start building a grammar for the named language."""
    return GrammarBuilder(language, header)


class Grammar:
    """A resolved grammar: every reference in it goes somewhere, and every
    production in it is there for a reason. It never changes.

    Don't construct this directly; call `build` on a `GrammarBuilder`.
    """

    __slots__ = ("_language", "_header", "_root", "_productions")

    _language: str
    _header: str
    _root: str | None
    _productions: typing.Mapping[str, Production]

    def __init__(
        self,
        language: str,
        header: str,
        productions: typing.Iterable[Production],
    ):
        # Productions belong to this grammar now, not the builder.
        owned = {}
        for production in productions:
            owned[production.name] = dataclasses.replace(production, grammar=self)

        object.__setattr__(self, "_language", language)
        object.__setattr__(self, "_header", header)
        object.__setattr__(self, "_root", next(iter(owned), None))
        object.__setattr__(self, "_productions", types.MappingProxyType(owned))

    def __setattr__(self, name, value):
        raise dataclasses.FrozenInstanceError(f"cannot assign to field {name!r}")

    def __delattr__(self, name):
        raise dataclasses.FrozenInstanceError(f"cannot delete field {name!r}")

    @property
    def language(self) -> str:
        return self._language

    @property
    def header(self) -> str:
        return self._header

    @property
    def root(self) -> str | None:
        """The name of the root production, which is the first one."""
        return self._root

    def has_production(self, name: str) -> bool:
        return name in self._productions

    def production(self, name: str) -> Production:
        production = self._productions.get(name)
        if production is None:
            raise UnknownProductionError(name)
        return production

    def productions(self) -> tuple[Production, ...]:
        return tuple(self._productions.values())

    def transform(
        self,
        production: str,
        transformation: ProductionTransformation[P, R],
        param: P,
    ) -> R:
        """Run `transformation` on the named production and return the result."""
        return self.production(production).transform(transformation, param)

    def accept(self, visitor: GrammarVisitor):
        """Show every production to the visitor, in the order they were added."""
        for production in self._productions.values():
            production.accept(visitor)

    def __contains__(self, name: object) -> bool:
        return name in self._productions

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._productions)

    def __len__(self) -> int:
        return len(self._productions)

    def __eq__(self, other):
        if not isinstance(other, Grammar):
            return NotImplemented
        return (
            self._language == other._language
            and self._header == other._header
            and list(self._productions.values()) == list(other._productions.values())
        )

    def __hash__(self):
        return hash((self._language, tuple(self._productions)))

    def __repr__(self) -> str:
        return f"Grammar({self._language!r}, productions={list(self._productions)!r})"
