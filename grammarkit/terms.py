"""The terms that grammars are made of.

There are exactly eight kinds of term: literals, character sets, references to
other productions (non-terminals), sequences, alternatives, optional terms,
repetitions, and epsilon (the empty term). They're all immutable, and they all
check their own shape when they're constructed, so a term that exists is a
term that makes sense. (Whether the productions it refers to exist is a
question for `resolve`.)

You normally don't construct terms directly. Use the factory functions at the
bottom of this module instead:

    one_of(
        sequence(literal("("), non_terminal("expression"), literal(")")),
        one_or_more(characters_of_set("DIGIT")),
    )

or, if you like, the operators:

    literal("(") + non_terminal("expression") + literal(")") | non_terminal("number")

The factories assemble trees by attaching terms to one of three targets: a
`Container` (a list of choices), a `Sequenced` (a list of things in order), or
a `ProductionBody`. Attaching is where nested alternatives get flattened into
their parent's choices and nested sequences get flattened into their parent's
sequence, which keeps the trees shallow.
"""

import abc
import dataclasses
import typing

from .errors import GrammarConstructionError
from .transform import VISIT, TermTransformation, TermVisitor

P = typing.TypeVar("P")
R = typing.TypeVar("R")

ANY_CHARACTER = "ANY"

# One past the largest code point.
UNICODE_MAX_CP = 1114112


class Term(abc.ABC):
    __slots__ = ()

    def __or__(self, other: "Term") -> "Term":
        return one_of(self, other)

    def __add__(self, other: "Term") -> "Term":
        return sequence(self, other)

    @abc.abstractmethod
    def transform(self, transformation: TermTransformation[P, R], param: P) -> R:
        """Call the method of `transformation` that handles this kind of term."""
        raise NotImplementedError()

    def accept(self, visitor: TermVisitor):
        self.transform(VISIT, visitor)

    def add_to(self, target: "AttachmentTarget") -> "AttachmentTarget":
        """Attach this term to the given target, and return the target."""
        match target:
            case Container() | Sequenced():
                target.terms.append(self)
            case ProductionBody():
                target.fill(self)
            case _:
                typing.assert_never(target)
        return target


def _check_term(term: typing.Any) -> Term:
    if not isinstance(term, Term):
        raise GrammarConstructionError(f"Expected a term, got {term!r}")
    return term


def _is_int(value: typing.Any) -> bool:
    # bool is an int, but True is not a number.
    return isinstance(value, int) and not isinstance(value, bool)


def _check_terms(kind: str, terms: tuple[Term, ...]):
    if len(terms) == 0:
        raise GrammarConstructionError(f"{kind} needs at least one term")
    for term in terms:
        _check_term(term)


@dataclasses.dataclass(frozen=True, slots=True)
class Literal(Term):
    value: str
    case_sensitive: bool = True

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise GrammarConstructionError(f"Literal value must be a string, got {self.value!r}")
        if len(self.value) == 0:
            raise GrammarConstructionError("Literal value must not be empty")

    def transform(self, transformation, param):
        return transformation.transform_literal(param, self)


@dataclasses.dataclass(frozen=True, slots=True)
class CharacterSet(Term):
    """Any one character of a named set, except for the excluded code points.

    Whether the excluded code points are actually in the set is not checked;
    the set names are just names as far as we are concerned.
    """

    set_name: str
    excluded: frozenset[int] = frozenset()

    def __post_init__(self):
        if not isinstance(self.set_name, str) or len(self.set_name) == 0:
            raise GrammarConstructionError(
                f"Character set name must be a non-empty string, got {self.set_name!r}"
            )
        object.__setattr__(self, "excluded", frozenset(self.excluded))
        for cp in self.excluded:
            if not _is_int(cp) or cp < 0 or cp >= UNICODE_MAX_CP:
                raise GrammarConstructionError(f"{cp!r} is not a code point")

    @property
    def is_any(self) -> bool:
        return self.set_name == ANY_CHARACTER

    def except_(self, *code_points: int) -> "CharacterSet":
        """A new set like this one that also excludes the given code points."""
        return dataclasses.replace(self, excluded=self.excluded | frozenset(code_points))

    def transform(self, transformation, param):
        return transformation.transform_character_set(param, self)


@dataclasses.dataclass(frozen=True, slots=True)
class NonTerminal(Term):
    """A reference to a production, by name."""

    name: str

    def __post_init__(self):
        if not isinstance(self.name, str) or len(self.name) == 0:
            raise GrammarConstructionError(
                f"Production name must be a non-empty string, got {self.name!r}"
            )

    def transform(self, transformation, param):
        return transformation.transform_non_terminal(param, self)


@dataclasses.dataclass(frozen=True, slots=True)
class Sequence(Term):
    terms: tuple[Term, ...]

    def __post_init__(self):
        object.__setattr__(self, "terms", tuple(self.terms))
        _check_terms("A sequence", self.terms)

    def __iter__(self) -> typing.Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def add_to(self, target):
        # Sequences inside sequences are just longer sequences.
        if isinstance(target, Sequenced):
            target.terms.extend(self.terms)
            return target
        return Term.add_to(self, target)

    def transform(self, transformation, param):
        return transformation.transform_sequence(param, self)


@dataclasses.dataclass(frozen=True, slots=True)
class Alternatives(Term):
    """A choice between terms. The first one is the preferred one, which
    matters to things like generators that need a default."""

    terms: tuple[Term, ...]

    def __post_init__(self):
        object.__setattr__(self, "terms", tuple(self.terms))
        _check_terms("A set of alternatives", self.terms)

    @property
    def preferred(self) -> Term:
        return self.terms[0]

    def __iter__(self) -> typing.Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def add_to(self, target):
        if isinstance(target, Container):
            target.terms.extend(self.terms)
            return target
        return Term.add_to(self, target)

    def transform(self, transformation, param):
        return transformation.transform_alternatives(param, self)


@dataclasses.dataclass(frozen=True, slots=True)
class Optional(Term):
    term: Term

    def __post_init__(self):
        _check_term(self.term)

    def transform(self, transformation, param):
        return transformation.transform_optional(param, self)


@dataclasses.dataclass(frozen=True, slots=True)
class Repetition(Term):
    """`term`, repeated at least `min` times and at most `max` times. A `max`
    of None means there is no upper bound."""

    term: Term
    min: int = 0
    max: int | None = None

    def __post_init__(self):
        _check_term(self.term)
        if not _is_int(self.min) or self.min < 0:
            raise GrammarConstructionError(
                f"Minimum repetition must be a non-negative integer, got {self.min!r}"
            )
        if self.max is not None:
            if not _is_int(self.max):
                raise GrammarConstructionError(
                    f"Maximum repetition must be an integer, got {self.max!r}"
                )
            if self.max < self.min:
                raise GrammarConstructionError(
                    f"Maximum repetition ({self.max}) is less than the minimum ({self.min})"
                )

    @property
    def bounded(self) -> bool:
        return self.max is not None

    def transform(self, transformation, param):
        return transformation.transform_repetition(param, self)


@dataclasses.dataclass(frozen=True, slots=True)
class Epsilon(Term):
    """The empty term: matches nothing at all. Use the singleton `EPSILON`."""

    def add_to(self, target):
        # Nothing followed by something is just the something.
        if isinstance(target, Sequenced):
            return target
        return Term.add_to(self, target)

    def transform(self, transformation, param):
        return transformation.transform_epsilon(param, self)


EPSILON = Epsilon()


###############################################################################
# Attachment targets
###############################################################################
class Container:
    """An ordered list of choices."""

    terms: list[Term]

    def __init__(self):
        self.terms = []

    def build(self) -> Term:
        if len(self.terms) == 1:
            return self.terms[0]
        return Alternatives(tuple(self.terms))


class Sequenced:
    """An ordered list of terms that follow one another. This is the body of
    a sequence, but also of an optional term or a repetition."""

    terms: list[Term]

    def __init__(self):
        self.terms = []

    def build(self) -> Term:
        if len(self.terms) == 0:
            return EPSILON
        if len(self.terms) == 1:
            return self.terms[0]
        return Sequence(tuple(self.terms))


class ProductionBody:
    """The definition slot of a production. It can only be filled once."""

    term: Term | None

    def __init__(self):
        self.term = None

    def fill(self, term: Term):
        if self.term is not None:
            raise GrammarConstructionError("The production already has a definition")
        self.term = term

    def build(self) -> Term:
        if self.term is None:
            raise GrammarConstructionError("The production has no definition")
        return self.term


AttachmentTarget = Container | Sequenced | ProductionBody


###############################################################################
# Factories
###############################################################################
def _sequenced(*terms: Term) -> Term:
    target = Sequenced()
    for term in terms:
        _check_term(term).add_to(target)
    return target.build()


def epsilon() -> Term:
    return EPSILON


def literal(value: str) -> Term:
    return Literal(value, case_sensitive=True)


def case_insensitive(value: str) -> Term:
    return Literal(value, case_sensitive=False)


def characters_of_set(name: str) -> CharacterSet:
    return CharacterSet(name)


def any_character() -> CharacterSet:
    return CharacterSet(ANY_CHARACTER)


def non_terminal(production: str) -> Term:
    return NonTerminal(production)


def sequence(first: Term, *more: Term) -> Term:
    """A sequence of terms. A sequence of one term is just that term."""
    if len(more) == 0:
        return _check_term(first)
    return _sequenced(first, *more)


def one_of(first: Term, *alternatives: Term) -> Term:
    """A choice between terms, the first of which is preferred. A choice of one
    term is just that term."""
    if len(alternatives) == 0:
        return _check_term(first)
    target = Container()
    for term in (first, *alternatives):
        _check_term(term).add_to(target)
    return target.build()


def optional(first: Term, *more: Term) -> Term:
    """Mark a sequence as optional."""
    return Optional(_sequenced(first, *more))


def zero_or_more(first: Term, *more: Term) -> Term:
    return Repetition(_sequenced(first, *more), 0, None)


def one_or_more(first: Term, *more: Term) -> Term:
    return at_least(1, first, *more)


def at_least(times: int, first: Term, *more: Term) -> Term:
    return Repetition(_sequenced(first, *more), times, None)


def repeat_exactly(times: int, first: Term, *more: Term) -> Term:
    return Repetition(_sequenced(first, *more), times, times)


def repeat(min: int, max: int | None, first: Term, *more: Term) -> Term:
    """A sequence repeated between `min` and `max` times (inclusive). Pass None
    as `max` to leave the repetition unbounded."""
    return Repetition(_sequenced(first, *more), min, max)
