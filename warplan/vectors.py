"""
Attack vectors: the chains of enemy territories an attack runs through.

An attack vector is written ``<front units>:<territory 1 units>,<territory 2
units>,...``. For instance, 10 armies in Scotland attacking York (3), then
Oxford (2), then London (99) is ``10:3,2,99``.

Vectors are immutable. The simulator works on copies of the unit counts, so a
vector can be predicted any number of times with any bonus.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from warplan.config import Limits

MIN_FRONT_UNITS = 1


class VectorError(ValueError):
    """An attack vector definition that can't be used."""


@dataclass(frozen=True)
class Territory:
    """An enemy-held territory and the units defending it."""

    units: int


@dataclass(frozen=True)
class AttackVector:
    """An ordered chain of territories attacked from one front.

    ``definition`` is the text the vector was written as; it identifies the
    vector in reports. Use :meth:`build` or :func:`parse_attack_vector`
    rather than the raw constructor so size limits are enforced.
    """

    definition: str
    front_units: int
    territories: tuple[Territory, ...]

    def __post_init__(self) -> None:
        if not self.territories:
            raise VectorError(f"attack vector {self.definition!r} has no territories")
        if self.front_units < MIN_FRONT_UNITS:
            raise VectorError(
                f"attack vector {self.definition!r} needs at least "
                f"{MIN_FRONT_UNITS} unit on the front, got {self.front_units}"
            )
        for territory in self.territories:
            if territory.units < 0:
                raise VectorError(
                    f"attack vector {self.definition!r} has a territory with "
                    f"negative units ({territory.units})"
                )

    def __len__(self) -> int:
        return len(self.territories)

    @property
    def territory_units(self) -> list[int]:
        return [t.units for t in self.territories]

    def units_beyond(self, index: int) -> int:
        """Total defenders in the territories after ``index``."""
        return sum(t.units for t in self.territories[index + 1:])

    @classmethod
    def build(
        cls,
        front_units: int,
        territory_units: Iterable[int],
        *,
        definition: str | None = None,
        limits: Limits | None = None,
    ) -> AttackVector:
        """Build a vector from already-parsed unit counts.

        Raises VectorError for an empty territory chain, a front with no
        units, negative territory units, or more territories than
        ``limits.max_territories``.
        """
        limits = limits or Limits()
        units = list(territory_units)
        if definition is None:
            definition = f"{front_units}:" + ",".join(str(u) for u in units)
        if len(units) > limits.max_territories:
            raise VectorError(
                f"attack vector {definition!r} has {len(units)} territories, "
                f"the limit is {limits.max_territories}"
            )
        return cls(
            definition=definition,
            front_units=front_units,
            territories=tuple(Territory(u) for u in units),
        )

    @classmethod
    def parse(cls, definition: str, *, limits: Limits | None = None) -> AttackVector:
        return parse_attack_vector(definition, limits=limits)


def _parse_units(text: str, definition: str) -> int:
    text = text.strip()
    if not text:
        raise VectorError(f"malformed attack vector {definition!r}: empty unit count")
    try:
        return int(text)
    except ValueError:
        raise VectorError(
            f"malformed attack vector {definition!r}: {text!r} is not a unit count"
        ) from None


def parse_attack_vector(definition: str, *, limits: Limits | None = None) -> AttackVector:
    """Parse ``"<front>:<t1>,<t2>,..."`` into an AttackVector."""
    front_text, sep, rest = definition.partition(":")
    if not sep or not rest.strip():
        raise VectorError(
            f"malformed attack vector {definition!r}, expected "
            "<units on front>:<territory units>,<territory units>,..."
        )
    front_units = _parse_units(front_text, definition)
    units = [_parse_units(part, definition) for part in rest.split(",")]
    return AttackVector.build(front_units, units, definition=definition, limits=limits)


def parse_attack_vectors(
    definitions: Sequence[str], *, limits: Limits | None = None
) -> list[AttackVector]:
    """Parse every definition, enforcing ``limits.max_vectors``."""
    limits = limits or Limits()
    if not definitions:
        raise VectorError("at least one attack vector is required")
    if len(definitions) > limits.max_vectors:
        raise VectorError(
            f"{len(definitions)} attack vectors given, the limit is {limits.max_vectors}"
        )
    return [parse_attack_vector(d, limits=limits) for d in definitions]
