"""The exceptions raised while building and resolving grammars.

Construction errors are raised by the call that caused them. Resolution errors
are raised by `resolve` and mean that no grammar was produced at all.
"""

import typing


class GrammarError(Exception):
    """Base class for everything this package raises on purpose."""


class GrammarConstructionError(GrammarError, ValueError):
    """A term or production was put together wrong."""


class DuplicateProductionError(GrammarConstructionError):
    name: str
    locations: tuple[str, str]

    def __init__(self, name: str, existing: str, duplicate: str):
        self.name = name
        self.locations = (existing, duplicate)
        super().__init__(name)

    def __str__(self):
        existing, duplicate = self.locations
        return f"""Found more than one production named {self.name}:
- {existing}
- {duplicate}"""


class ResolutionError(GrammarError):
    """The grammar could not be resolved."""


class UndefinedProductionError(ResolutionError):
    # (production, reference) pairs, in the order they were found.
    missing: list[tuple[str, str]]

    def __init__(self, missing: typing.Iterable[tuple[str, str]]):
        self.missing = list(missing)
        super().__init__(self.missing)

    @property
    def names(self) -> set[str]:
        return {name for _, name in self.missing}

    def __str__(self):
        return f"{len(self.missing)} undefined production reference(s):\n" + "\n".join(
            f"- {production} refers to undefined production {name}"
            for production, name in self.missing
        )


class UnusedProductionError(ResolutionError):
    names: list[str]

    def __init__(self, names: typing.Iterable[str]):
        self.names = list(names)
        super().__init__(self.names)

    def __str__(self):
        return f"{len(self.names)} unused production(s): {', '.join(self.names)}"


class RootlessGrammarError(ResolutionError):
    language: str

    def __init__(self, language: str):
        self.language = language
        super().__init__(language)

    def __str__(self):
        return f"The grammar for {self.language} has no productions, so it has no root"


class UnknownProductionError(GrammarError, KeyError):
    name: str

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"No production named {self.name}"
