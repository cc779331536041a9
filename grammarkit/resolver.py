"""Turn a grammar under construction into a resolved, immutable grammar.

Resolution is all or nothing: either every check passes and you get a
`Grammar`, or you get an exception and nothing else. The checks are:

1. Every non-terminal refers to a production that exists. Nothing turns this
   check off; a grammar with a dangling reference is just broken.
2. There is a root. The root is the first production that was added, so this
   only fails when there are no productions at all (and `ALLOW_ROOTLESS`
   wasn't given).
3. Every production can be reached from a root by following references. What
   happens to productions that can't be reached depends on the options: it's
   an error by default, they are dropped with `SKIP_UNUSED_PRODUCTIONS`, and
   they are kept with `IGNORE_UNUSED_PRODUCTIONS`. (If you ask for both,
   they are dropped.)
"""

import logging
import typing

from . import grammar
from .errors import RootlessGrammarError, UndefinedProductionError, UnusedProductionError
from .options import ResolutionOption
from .terms import Term
from .transform import TermTransformation

resolve_log = logging.getLogger("grammarkit.resolve")


# NOTE: The references are gathered into a dict rather than a set so that they
#       come out in the order they appear in the grammar, which makes the
#       error messages come out in a sensible order too.
class _References(TermTransformation[dict[str, None], tuple[Term, ...]]):
    """Record the production a term refers to, if it is a reference, and hand
    back the terms nested directly inside it."""

    def transform_literal(self, param, literal):
        return ()

    def transform_character_set(self, param, characters):
        return ()

    def transform_non_terminal(self, param, non_terminal):
        param[non_terminal.name] = None
        return ()

    def transform_sequence(self, param, sequence):
        return sequence.terms

    def transform_alternatives(self, param, alternatives):
        return alternatives.terms

    def transform_optional(self, param, optional):
        return (optional.term,)

    def transform_repetition(self, param, repetition):
        return (repetition.term,)

    def transform_epsilon(self, param, epsilon):
        return ()


_REFERENCES = _References()


def references(production: "grammar.Production") -> list[str]:
    """The names of the productions referred to by `production`, in order."""
    result: dict[str, None] = {}
    queue: list[Term] = [production.definition]
    while len(queue) > 0:
        term = queue.pop()
        # Reversed, so that the first child is the next one popped.
        queue.extend(reversed(term.transform(_REFERENCES, result)))
    return list(result)


def resolve(
    builder: "grammar.GrammarBuilder",
    options: typing.Iterable[ResolutionOption] = (),
) -> "grammar.Grammar":
    """Check the productions in `builder` and return the resolved `Grammar`.

    Raises `UndefinedProductionError`, `RootlessGrammarError`, or
    `UnusedProductionError`. The builder itself is left alone.
    """
    options = frozenset(options)
    productions = builder.productions()

    # STEP 1: Every reference has to go somewhere.
    graph: dict[str, list[str]] = {p.name: references(p) for p in productions}
    missing = [
        (name, reference)
        for name, refs in graph.items()
        for reference in refs
        if reference not in graph
    ]
    if len(missing) > 0:
        raise UndefinedProductionError(missing)

    # STEP 2: Find the roots.
    if len(productions) == 0:
        if ResolutionOption.ALLOW_ROOTLESS not in options:
            raise RootlessGrammarError(builder.language)
        resolve_log.debug("%s: resolved an empty grammar", builder.language)
        return grammar.Grammar(builder.language, builder.header, [])

    roots = [productions[0].name]
    if ResolutionOption.ALLOW_ROOTLESS in options:
        # A production that only refers to itself is still top-level.
        referenced = {ref for name, refs in graph.items() for ref in refs if ref != name}
        roots.extend(name for name in graph if name not in referenced and name != roots[0])

    # STEP 3: Walk out from the roots and see what we can't reach.
    reachable: set[str] = set()
    queue = list(reversed(roots))
    while len(queue) > 0:
        name = queue.pop()
        if name in reachable:
            continue
        reachable.add(name)
        queue.extend(ref for ref in graph[name] if ref not in reachable)

    unused = [p.name for p in productions if p.name not in reachable]
    if len(unused) > 0:
        if ResolutionOption.SKIP_UNUSED_PRODUCTIONS in options:
            if resolve_log.isEnabledFor(logging.INFO):
                resolve_log.info(
                    "%s: skipping unused productions: %s",
                    builder.language,
                    ", ".join(unused),
                )
            productions = [p for p in productions if p.name in reachable]
        elif ResolutionOption.IGNORE_UNUSED_PRODUCTIONS in options:
            resolve_log.debug("%s: keeping %d unused productions", builder.language, len(unused))
        else:
            raise UnusedProductionError(unused)

    resolve_log.debug(
        "%s: resolved %d productions from roots %s",
        builder.language,
        len(productions),
        roots,
    )
    return grammar.Grammar(builder.language, builder.header, productions)
