"""Pure expense split logic - no I/O dependencies."""

import logging
import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

# (user id or None for guests, name)
ParticipantKey = tuple[str | None, str]


class SplitError(ValueError):
    """Raised for invalid split operations."""

    pass


@dataclass(frozen=True)
class SplitParticipant:
    """A registered user or a free-text name sharing an expense."""

    id: str | None
    name: str
    is_custom: bool = False

    @property
    def key(self) -> ParticipantKey:
        """Identity of the participant inside a split."""
        return (self.id or None, self.name)

    @classmethod
    def custom(cls, name: str) -> "SplitParticipant":
        """Free-text participant with no user account."""
        return cls(id=None, name=name, is_custom=True)


@dataclass(frozen=True)
class ExpenseSplit:
    """
    An expense amount distributed across participants.

    `manual` is the explicit auto/manual toggle: in auto mode shares are
    always the even split, in manual mode they are left as entered.
    `shares` is stored as a read-only copy of whatever mapping is passed in.
    """

    amount: float
    participants: tuple[SplitParticipant, ...] = ()
    shares: Mapping[ParticipantKey, float] = field(default_factory=dict, hash=False)
    manual: bool = False

    def __post_init__(self):
        object.__setattr__(self, "shares", MappingProxyType(dict(self.shares)))

    def share_for(self, key: ParticipantKey) -> float:
        return self.shares.get(key, 0.0)

    def participant(self, key: ParticipantKey) -> SplitParticipant:
        for p in self.participants:
            if p.key == key:
                return p
        raise SplitError(f"Unknown participant: {key}")

    def to_dict(self) -> dict:
        return {
            "amount": self.amount,
            "manual": self.manual,
            "shares": [
                {
                    "id": p.id,
                    "name": p.name,
                    "is_custom": p.is_custom,
                    "amount": self.share_for(p.key),
                }
                for p in self.participants
            ],
            "unallocated": unallocated(self),
        }


def coerce_amount(value: Any) -> float:
    """Convert user input to a float; anything non-numeric becomes 0.0."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.debug(f"Coercing non-numeric amount {value!r} to 0")
        return 0.0
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def even_share(amount: float, count: int) -> float:
    """Even share of an amount across `count` participants."""
    if count < 0:
        raise SplitError(f"Participant count cannot be negative: {count}")
    if count == 0:
        return 0.0
    return amount / count


def even_split(amount: float, participants: tuple[SplitParticipant, ...]) -> dict[ParticipantKey, float]:
    share = even_share(amount, len(participants))
    return {p.key: share for p in participants}


def create_split(amount: Any, participants: list[SplitParticipant] | tuple[SplitParticipant, ...] = ()) -> ExpenseSplit:
    """Create an auto-mode split with even shares."""
    participants = tuple(participants)
    keys = [p.key for p in participants]
    if len(set(keys)) != len(keys):
        raise SplitError("Duplicate participants in split")
    total = coerce_amount(amount)
    return ExpenseSplit(amount=total, participants=participants, shares=even_split(total, participants))


def recompute(split: ExpenseSplit) -> ExpenseSplit:
    """
    Recompute shares.

    Auto mode: every participant gets amount / N.
    Manual mode: shares are kept as entered.
    """
    if split.manual:
        return split
    return replace(split, shares=even_split(split.amount, split.participants))


def add_participant(split: ExpenseSplit, participant: SplitParticipant) -> ExpenseSplit:
    """Add a participant. New participants get 0.0 in manual mode."""
    if any(p.key == participant.key for p in split.participants):
        raise SplitError(f"{participant.name} is already part of this split")

    shares = dict(split.shares)
    shares[participant.key] = 0.0
    updated = replace(split, participants=split.participants + (participant,), shares=shares)
    return recompute(updated)


def remove_participant(split: ExpenseSplit, key: ParticipantKey) -> ExpenseSplit:
    """Remove a participant by key. Removing the last one returns to auto mode."""
    split.participant(key)

    participants = tuple(p for p in split.participants if p.key != key)
    shares = {k: v for k, v in split.shares.items() if k != key}
    manual = split.manual and bool(participants)
    return recompute(replace(split, participants=participants, shares=shares, manual=manual))


def set_share(split: ExpenseSplit, key: ParticipantKey, value: Any) -> ExpenseSplit:
    """Manually set one participant's share. Other shares are left untouched."""
    split.participant(key)

    shares = dict(split.shares)
    shares[key] = coerce_amount(value)
    return replace(split, shares=shares, manual=True)


def set_amount(split: ExpenseSplit, amount: Any) -> ExpenseSplit:
    """Change the expense total. Re-splits in auto mode only."""
    return recompute(replace(split, amount=coerce_amount(amount)))


def reset_split(split: ExpenseSplit) -> ExpenseSplit:
    """Drop manual overrides and go back to the even split."""
    return recompute(replace(split, manual=False))


def allocated_total(split: ExpenseSplit) -> float:
    return sum(split.share_for(p.key) for p in split.participants)


def unallocated(split: ExpenseSplit) -> float:
    """Amount not yet assigned to anyone (negative if over-allocated)."""
    return split.amount - allocated_total(split)


def is_balanced(split: ExpenseSplit, tolerance: float = 0.005) -> bool:
    """Check whether shares sum to the expense amount."""
    return abs(unallocated(split)) <= tolerance
