"""
Point charges and the ordered charge set.

Charges are plain value records: a position in viewport pixel coordinates
and a polarity. All charges share the same fixed magnitude, so polarity is
the only per-charge physical property.
"""

import math
from dataclasses import dataclass, replace
from numbers import Real
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple


class InvalidChargeError(ValueError):
    """Raised when a charge record is missing fields or has malformed values."""


@dataclass(frozen=True)
class Charge:
    """
    Point charge of fixed magnitude.

    Attributes:
        x: Horizontal position (px)
        y: Vertical position (px), growing downwards
        is_positive: Polarity; field points away from positive charges
    """
    x: float
    y: float
    is_positive: bool

    def __post_init__(self):
        for name in ('x', 'y'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidChargeError(f"Charge {name} must be a real number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidChargeError(f"Charge {name} must be finite, got {value!r}")
        if not isinstance(self.is_positive, bool):
            raise InvalidChargeError(
                f"Charge polarity must be a bool, got {self.is_positive!r}"
            )

    @property
    def sign(self) -> float:
        """+1.0 for positive charges, -1.0 for negative ones."""
        return 1.0 if self.is_positive else -1.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def moved_to(self, x: float, y: float) -> 'Charge':
        """Return a copy of this charge at a new position."""
        return replace(self, x=x, y=y)

    def flipped(self) -> 'Charge':
        """Return a copy of this charge with the opposite polarity."""
        return replace(self, is_positive=not self.is_positive)

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.x, y - self.y)

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> 'Charge':
        """
        Build a charge from an external record.

        Accepts ``{'x': ..., 'y': ..., 'is_positive': ...}``; the camel-case
        key ``isPositive`` is accepted as well.

        Raises:
            InvalidChargeError: If a field is missing or malformed
        """
        if not isinstance(record, Mapping):
            raise InvalidChargeError(f"Charge record must be a mapping, got {type(record).__name__}")

        polarity_key = 'is_positive' if 'is_positive' in record else 'isPositive'
        missing = [k for k in ('x', 'y', polarity_key) if k not in record]
        if missing:
            raise InvalidChargeError(f"Charge record missing field(s): {', '.join(missing)}")

        return cls(x=record['x'], y=record['y'], is_positive=record[polarity_key])

    def to_mapping(self) -> dict:
        return {'x': self.x, 'y': self.y, 'is_positive': self.is_positive}


def validate_charges(charges: Iterable[Any]) -> List[Charge]:
    """
    Check that every element is a ``Charge`` and return them as a list.

    Args:
        charges: Charges supplied by the UI collaborator

    Returns:
        List of charges in the given order

    Raises:
        InvalidChargeError: If any element is not a Charge
    """
    if charges is None:
        raise InvalidChargeError("Charge collection is None")

    validated = []
    for index, charge in enumerate(charges):
        if not isinstance(charge, Charge):
            raise InvalidChargeError(
                f"Element {index} is not a Charge: {charge!r}"
            )
        validated.append(charge)
    return validated


class ChargeSet:
    """
    Ordered, appendable collection of charges.

    The UI layer owns the set and mutates it between render passes; the
    core only ever receives it (or a snapshot of it) as a read-only
    sequence.
    """

    def __init__(self, charges: Optional[Iterable[Charge]] = None):
        self._charges: List[Charge] = validate_charges(charges or [])

    def __len__(self) -> int:
        return len(self._charges)

    def __iter__(self) -> Iterator[Charge]:
        return iter(self._charges)

    def __getitem__(self, index: int) -> Charge:
        return self._charges[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChargeSet):
            return NotImplemented
        return self._charges == other._charges

    def __repr__(self) -> str:
        return f"ChargeSet({self._charges!r})"

    def add(self, x: float, y: float, is_positive: bool) -> Charge:
        """Append a new charge and return it."""
        charge = Charge(x, y, is_positive)
        self._charges.append(charge)
        return charge

    def append(self, charge: Charge) -> None:
        self._charges.extend(validate_charges([charge]))

    def move(self, index: int, x: float, y: float) -> Charge:
        """
        Replace the position of the charge at ``index``.

        Raises:
            IndexError: If no charge exists at that index
        """
        moved = self._charges[index].moved_to(x, y)
        self._charges[index] = moved
        return moved

    def find_at(self, x: float, y: float, radius: float) -> Optional[int]:
        """
        Index of the first charge whose centre is strictly within ``radius``
        of the point, or None.
        """
        for index, charge in enumerate(self._charges):
            if charge.distance_to(x, y) < radius:
                return index
        return None

    def snapshot(self) -> Tuple[Charge, ...]:
        """Immutable copy of the current charges for a render pass."""
        return tuple(self._charges)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> 'ChargeSet':
        return cls(Charge.from_mapping(r) for r in records)

    def to_records(self) -> List[dict]:
        return [c.to_mapping() for c in self._charges]
