"""Exceptions raised by the ptudex pipeline.

Every error here is fatal for the batch that raised it. Nothing inside the
package retries or swallows them; they propagate to the caller.
"""


class PtudexError(Exception):
    """Base class for ptudex errors."""


class ReferenceDataError(PtudexError):
    """PokeAPI species or egg-group data could not be resolved."""


class UnresolvedIdentityError(PtudexError):
    """No national Pokédex number could be found for a Pokémon."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Failed to find national pokedex number for {name}")


class MissingCheckpointError(PtudexError):
    """A JSON checkpoint required by a later stage does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"JSON file does not exist: {path}")


class ExtractionError(PtudexError):
    """The extraction collaborator returned data that fails the schema."""
