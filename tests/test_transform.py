import pytest

from grammarkit import (
    EPSILON,
    GrammarVisitor,
    ProductionTransformation,
    TermTransformation,
    TermVisitor,
    UnknownProductionError,
    any_character,
    case_insensitive,
    characters_of_set,
    epsilon,
    grammar,
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


class EBNF(TermTransformation[bool, str]):
    """Formats terms as EBNF-ish text. The parameter says whether the term is
    nested inside something that binds tighter than a choice."""

    def transform_literal(self, param, literal):
        text = f'"{literal.value}"'
        return text if literal.case_sensitive else text + "i"

    def transform_character_set(self, param, characters):
        text = characters.set_name
        if characters.excluded:
            text += " - [" + "".join(sorted(chr(cp) for cp in characters.excluded)) + "]"
        return text

    def transform_non_terminal(self, param, non_terminal):
        return non_terminal.name

    def transform_sequence(self, param, sequence):
        return " ".join(term.transform(self, True) for term in sequence.terms)

    def transform_alternatives(self, param, alternatives):
        text = " | ".join(term.transform(self, False) for term in alternatives.terms)
        return f"({text})" if param else text

    def transform_optional(self, param, optional):
        return "[" + optional.term.transform(self, False) + "]"

    def transform_repetition(self, param, repetition):
        inner = repetition.term.transform(self, False)
        if repetition.min == 0 and repetition.max is None:
            return "{" + inner + "}"
        upper = "" if repetition.max is None else str(repetition.max)
        return "{" + inner + "}" + f"{repetition.min}..{upper}"

    def transform_epsilon(self, param, epsilon):
        return "()"


class Rule(ProductionTransformation[EBNF, str]):
    def transform_production(self, param, production):
        return f"{production.name} = {production.definition.transform(param, False)} ;"


class Boom(Exception):
    pass


class Explode(EBNF):
    def transform_non_terminal(self, param, non_terminal):
        raise Boom(non_terminal.name)


class Counter(GrammarVisitor):
    """Counts literals and references, walking all the way down."""

    def __init__(self):
        self.productions = []
        self.literals = 0
        self.references = []

    def visit_production(self, production):
        self.productions.append(production.name)
        production.definition.accept(self)

    def visit_literal(self, literal):
        self.literals += 1

    def visit_non_terminal(self, non_terminal):
        self.references.append(non_terminal.name)

    def visit_sequence(self, sequence):
        for term in sequence.terms:
            term.accept(self)

    def visit_alternatives(self, alternatives):
        for term in alternatives.terms:
            term.accept(self)

    def visit_optional(self, optional):
        optional.term.accept(self)

    def visit_repetition(self, repetition):
        repetition.term.accept(self)


def make_grammar():
    return (
        grammar("strings")
        .production(
            "value",
            non_terminal("string"),
            case_insensitive("null"),
        )
        .production(
            "string",
            sequence(literal('"'), zero_or_more(non_terminal("char")), literal('"')),
        )
        .production(
            "char",
            any_character().except_(ord('"'), ord("\\")),
            sequence(
                literal("\\"),
                one_of(
                    literal('"'),
                    literal("\\"),
                    literal("u") + repeat_exactly(4, characters_of_set("HEX")),
                ),
            ),
        )
        .build()
    )


def test_transform_terms():
    xform = EBNF()
    assert literal("a").transform(xform, False) == '"a"'
    assert case_insensitive("a").transform(xform, False) == '"a"i'
    assert epsilon().transform(xform, False) == "()"
    assert optional(literal("a"), literal("b")).transform(xform, False) == '["a" "b"]'
    assert repeat(1, 3, non_terminal("x")).transform(xform, False) == "{x}1..3"
    assert one_or_more(non_terminal("x")).transform(xform, False) == "{x}1.."
    choice = literal("a") + (literal("b") | literal("c"))
    assert choice.transform(xform, False) == '"a" ("b" | "c")'


def test_transform_production():
    g = make_grammar()
    assert g.transform("value", Rule(), EBNF()) == 'value = string | "null"i ;'
    assert g.transform("string", Rule(), EBNF()) == 'string = """ {char} """ ;'


def test_transform_character_set_with_exclusions():
    g = make_grammar()
    text = g.production("char").definition.transform(EBNF(), False)
    assert text.startswith('ANY - ["\\] | "\\" ')
    assert text.endswith('"u" {HEX}4..4)')


def test_transform_unknown_production():
    g = make_grammar()
    with pytest.raises(UnknownProductionError):
        g.transform("number", Rule(), EBNF())


def test_transform_failures_propagate_unchanged():
    g = make_grammar()
    with pytest.raises(Boom) as info:
        g.transform("value", Rule(), Explode())
    assert info.value.args == ("string",)
    assert info.value.__cause__ is None
    assert info.value.__context__ is None


def test_visit_grammar():
    g = make_grammar()
    counter = Counter()
    g.accept(counter)

    assert counter.productions == ["value", "string", "char"]
    assert counter.references == ["string", "char"]
    # "null", the two quotes, and the four in the escapes.
    assert counter.literals == 7


def test_default_visitor_does_nothing():
    visitor = TermVisitor()
    for term in [
        literal("a"),
        any_character(),
        non_terminal("a"),
        literal("a") + literal("b"),
        literal("a") | literal("b"),
        optional(literal("a")),
        zero_or_more(literal("a")),
        EPSILON,
    ]:
        assert term.accept(visitor) is None


def test_visit_production_directly():
    g = make_grammar()
    counter = Counter()
    g.production("string").accept(counter)
    assert counter.productions == ["string"]
    assert counter.references == ["char"]
    assert counter.literals == 2
