"""Transformations and visitors over terms and productions.

This is how anything outside of the term model gets to walk a grammar. A
`TermTransformation` has one method per kind of term; a term's `transform`
method calls the right one, handing along whatever parameter you gave it, and
returns whatever that method returns. If the method raises, the exception
comes straight out of `transform` untouched.

A visitor is a transformation that doesn't produce anything: you subclass
`TermVisitor` (or `GrammarVisitor` if you want productions too) and override
the cases you care about.

To write a new consumer (a railroad diagram renderer, an EBNF printer, a fuzzer)
you subclass one of these. You never have to touch the terms.
"""

import abc
import typing

if typing.TYPE_CHECKING:
    from .grammar import Production
    from .terms import (
        Alternatives,
        CharacterSet,
        Epsilon,
        Literal,
        NonTerminal,
        Optional,
        Repetition,
        Sequence,
    )

P = typing.TypeVar("P")
R = typing.TypeVar("R")


class TermTransformation(abc.ABC, typing.Generic[P, R]):
    @abc.abstractmethod
    def transform_literal(self, param: P, literal: "Literal") -> R:
        raise NotImplementedError()

    @abc.abstractmethod
    def transform_character_set(self, param: P, characters: "CharacterSet") -> R:
        raise NotImplementedError()

    @abc.abstractmethod
    def transform_non_terminal(self, param: P, non_terminal: "NonTerminal") -> R:
        raise NotImplementedError()

    @abc.abstractmethod
    def transform_sequence(self, param: P, sequence: "Sequence") -> R:
        raise NotImplementedError()

    @abc.abstractmethod
    def transform_alternatives(self, param: P, alternatives: "Alternatives") -> R:
        raise NotImplementedError()

    @abc.abstractmethod
    def transform_optional(self, param: P, optional: "Optional") -> R:
        raise NotImplementedError()

    @abc.abstractmethod
    def transform_repetition(self, param: P, repetition: "Repetition") -> R:
        raise NotImplementedError()

    @abc.abstractmethod
    def transform_epsilon(self, param: P, epsilon: "Epsilon") -> R:
        raise NotImplementedError()


class ProductionTransformation(abc.ABC, typing.Generic[P, R]):
    @abc.abstractmethod
    def transform_production(self, param: P, production: "Production") -> R:
        raise NotImplementedError()


class TermVisitor:
    """Side-effecting traversal of terms. Every case does nothing by default.

    Visiting a composite term does *not* automatically visit its children;
    call `accept` on them yourself if you want to go deeper. That way you get
    to decide what happens before and after.
    """

    def visit_literal(self, literal: "Literal"):
        pass

    def visit_character_set(self, characters: "CharacterSet"):
        pass

    def visit_non_terminal(self, non_terminal: "NonTerminal"):
        pass

    def visit_sequence(self, sequence: "Sequence"):
        pass

    def visit_alternatives(self, alternatives: "Alternatives"):
        pass

    def visit_optional(self, optional: "Optional"):
        pass

    def visit_repetition(self, repetition: "Repetition"):
        pass

    def visit_epsilon(self, epsilon: "Epsilon"):
        pass


class GrammarVisitor(TermVisitor):
    def visit_production(self, production: "Production"):
        pass


class _Visit(TermTransformation[TermVisitor, None]):
    """Adapts a visitor so it can be driven by `transform`."""

    def transform_literal(self, param, literal):
        param.visit_literal(literal)

    def transform_character_set(self, param, characters):
        param.visit_character_set(characters)

    def transform_non_terminal(self, param, non_terminal):
        param.visit_non_terminal(non_terminal)

    def transform_sequence(self, param, sequence):
        param.visit_sequence(sequence)

    def transform_alternatives(self, param, alternatives):
        param.visit_alternatives(alternatives)

    def transform_optional(self, param, optional):
        param.visit_optional(optional)

    def transform_repetition(self, param, repetition):
        param.visit_repetition(repetition)

    def transform_epsilon(self, param, epsilon):
        param.visit_epsilon(epsilon)


VISIT = _Visit()
