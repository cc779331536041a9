"""Options that change how grammars are read and resolved.

There are two independent sets of options, one for each place they matter:
`ResolutionOption` for `resolve`, and `ReaderOption` for whatever reads
grammar documents. Callers who go through `parse` get to hand over a single
list of `ParserOption`s, which `split_options` sorts out into the other two.
"""

import enum
import typing


class ResolutionOption(enum.Enum):
    # Quietly drop productions that can't be reached from the root.
    SKIP_UNUSED_PRODUCTIONS = "skip_unused_productions"
    # Keep productions that can't be reached from the root, and don't complain.
    IGNORE_UNUSED_PRODUCTIONS = "ignore_unused_productions"
    # Allow a grammar with no productions, and treat every production nobody
    # refers to as a root of its own.
    ALLOW_ROOTLESS = "allow_rootless"


class ReaderOption(enum.Enum):
    FAIL_ON_UNKNOWN_ATTRIBUTE = "fail_on_unknown_attribute"


class ParserOption(enum.Enum):
    FAIL_ON_UNKNOWN_ATTRIBUTE = "fail_on_unknown_attribute"
    SKIP_UNUSED_PRODUCTIONS = "skip_unused_productions"
    IGNORE_UNUSED_PRODUCTIONS = "ignore_unused_productions"
    ALLOW_ROOTLESS_GRAMMAR = "allow_rootless_grammar"

    @classmethod
    def from_properties(
        cls, properties: typing.Mapping[str, typing.Any]
    ) -> frozenset["ParserOption"]:
        """Work out which options are turned on in a bag of properties.

        The keys are the option names (e.g. `SKIP_UNUSED_PRODUCTIONS`); an
        option is on if its value is `True` or the string "true", in any case.
        Anything else is off, and keys that aren't options are ignored.
        """
        result = set()
        for option in cls:
            value = properties.get(option.name)
            if value is True or (isinstance(value, str) and value.strip().lower() == "true"):
                result.add(option)
        return frozenset(result)


def split_options(
    options: typing.Iterable[ParserOption],
) -> tuple[frozenset[ReaderOption], frozenset[ResolutionOption]]:
    """Sort a list of parser options into the ones for the document reader and
    the ones for the resolver."""
    reader: set[ReaderOption] = set()
    resolution: set[ResolutionOption] = set()
    for option in options:
        match option:
            case ParserOption.FAIL_ON_UNKNOWN_ATTRIBUTE:
                reader.add(ReaderOption.FAIL_ON_UNKNOWN_ATTRIBUTE)
            case ParserOption.SKIP_UNUSED_PRODUCTIONS:
                resolution.add(ResolutionOption.SKIP_UNUSED_PRODUCTIONS)
            case ParserOption.IGNORE_UNUSED_PRODUCTIONS:
                resolution.add(ResolutionOption.IGNORE_UNUSED_PRODUCTIONS)
            case ParserOption.ALLOW_ROOTLESS_GRAMMAR:
                resolution.add(ResolutionOption.ALLOW_ROOTLESS)
            case _:
                raise ValueError(f"Unknown parser option {option!r}")
    return frozenset(reader), frozenset(resolution)
