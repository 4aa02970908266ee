"""Cards, stacks and the enumerations shared by the solitaire games."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, List, Optional

SHENZHEN_FUNDAMENTAL_COUNT = 3
SAWAYAMA_FUNDAMENTAL_COUNT = 4


class ShenzhenColor(IntEnum):
    """Suits of the Shenzhen game."""

    RED = 0
    GREEN = 1
    WHITE = 2
    FLOWER = 4


class SawayamaColor(IntEnum):
    """Suits of the Sawayama game."""

    HEART = 0
    LEAF = 1
    ARROW = 2
    DIAMOND = 3


class MoveType(IntEnum):
    """Kind of move that started a card's visual interpolation."""

    PLACE = 0
    PICK = 1
    DEAL = 2
    AUTOMOVE = 3
    FAILED_MOVE = 4
    DRAW_CARD = 5
    UNIFY = 6


class StackType(IntEnum):
    """Role of a stack on the table."""

    BASE = 0
    DRAGON = 1
    FLOWER = 2
    FOUNDATION = 3
    DRAGGING = 4
    DRAW = 5
    PICK = 6
    TOP = 7


@dataclass(frozen=True)
class Vector2:
    """A 2D point or offset."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top left corner and size."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def contains(self, point: Vector2) -> bool:
        """Whether ``point`` lies inside the rectangle."""
        return self.x <= point.x <= self.x + self.w and self.y <= point.y <= self.y + self.h


@dataclass(eq=False)
class Card:
    """One card with its game state and the state of its animation."""

    card_id: int = 0
    card_type: str = "Card"
    derived: Any = field(default=None, repr=False)
    entity_manager: Any = field(default=None, repr=False)

    large_icon: Any = field(default=None, repr=False)
    small_icon: Any = field(default=None, repr=False)
    front_map: Any = field(default=None, repr=False)
    back_map: Any = field(default=None, repr=False)
    shadow_map: Any = field(default=None, repr=False)
    textured_map: Any = field(default=None, repr=False)

    is_inverted: bool = False
    color: int = 0

    in_stack_index: int = -1
    previous_stack_index: int = -1
    previous_visual_position: Vector2 = field(default_factory=Vector2)

    visual_end_at_stack: Any = field(default=None, repr=False)

    in_transaction_id: int = 0
    did_physical_move: bool = False

    row_position: int = 0

    z_layer: int = 0
    visual_end_z_layer: int = 0
    visual_start_z_layer: int = 0

    hitbox: Rect = field(default_factory=Rect)

    visual_start: Vector2 = field(default_factory=Vector2)
    visual_position: Vector2 = field(default_factory=Vector2)
    visual_end: Vector2 = field(default_factory=Vector2)
    visual_move_type: MoveType = MoveType.PLACE

    visual_start_time: float = -1.0
    visual_elapsed: float = 0.0
    visual_duration: float = 0.0

    highlight_duration: float = 0.0
    should_highlight: bool = False

    def reset_visual_interpolation(self) -> None:
        """Stop any running animation, leaving the card where it is drawn."""
        self.visual_start_time = -1.0
        self.visual_elapsed = 0.0
        self.visual_duration = 0.0
        self.visual_start = self.visual_position
        self.visual_end = self.visual_position
        self.visual_end_at_stack = None


@dataclass(eq=False)
class Stack:
    """A pile of cards; the last card in ``cards`` is the one on top."""

    stack_index: int = -1
    cards: List[Card] = field(default_factory=list)
    stack_type: StackType = StackType.BASE
    closed: bool = False
    will_be_occupied: bool = False
    release_region: Rect = field(default_factory=Rect)
    visual_start: Vector2 = field(default_factory=Vector2)
    z_offset: int = 0

    def top(self) -> Optional[Card]:
        """The card on top of the stack, or None when it is empty."""
        return self.cards[-1] if self.cards else None


@dataclass
class DefaultGameVisuals:
    """Default offsets and durations used when animating cards."""

    default_card_row_offset: float = 0.135
    default_card_visual_duration: float = 0.17
    default_card_delay_duration: float = 0.1
    default_dealing_visual_duration: float = 0.17
    default_dealing_delay_duration: float = 0.1
    default_animating_z_layer_offset: int = 80