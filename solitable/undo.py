"""Frame-by-frame undo for card state, stored as compact binary diffs.

Each frame that ends with :meth:`UndoHandler.end_frame` produces one record:
a little-endian ``u16`` count of changed cards, then for each card its
``u32`` id, a ``u8`` count of changed fields and, per field, the ``u8``
field index followed by the old and the new encoded value.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from .arrays import add_at_index
from .entities import Card, MoveType, Rect, Stack, StackType, Vector2
from .string_builder import ByteReader, StringBuilder
from .table import Table

MAX_CARD_FIELDS = 69


class FieldKind(Enum):
    """How a card field is encoded in an undo record."""

    POD = "pod"
    STRING = "string"


def _single(value: Any) -> Tuple[Any, ...]:
    return (value,)


def _first(parts: Tuple[Any, ...]) -> Any:
    return parts[0]


@dataclass(frozen=True)
class CardField:
    """One card attribute tracked by the undo system."""

    name: str
    kind: FieldKind = FieldKind.POD
    fmt: str = ""
    to_parts: Callable[[Any], Tuple[Any, ...]] = _single
    from_parts: Callable[[Tuple[Any, ...]], Any] = _first

    @property
    def size(self) -> int:
        """Encoded size in bytes of a plain value."""
        if self.kind is FieldKind.STRING:
            raise ValueError(f"field {self.name!r} has no fixed size")
        return struct.calcsize("<" + self.fmt)

    def encode(self, card: Card) -> bytes:
        """The encoded value of this field on ``card``."""
        value = getattr(card, self.name)
        if self.kind is FieldKind.STRING:
            if value is None:
                return b""
            return value.encode("utf-8") if isinstance(value, str) else bytes(value)
        return struct.pack("<" + self.fmt, *self.to_parts(value))

    def decode(self, data: bytes) -> Any:
        """The value that ``data`` encodes."""
        if self.kind is FieldKind.STRING:
            return data.decode("utf-8")
        return self.from_parts(struct.unpack("<" + self.fmt, data))


def _vector_field(name: str) -> CardField:
    return CardField(name, FieldKind.POD, "dd", lambda v: (v.x, v.y), lambda p: Vector2(*p))


_CARD_FIELDS: Tuple[CardField, ...] = (
    CardField("is_inverted", FieldKind.POD, "?"),
    CardField("color", FieldKind.POD, "B"),
    CardField("in_stack_index", FieldKind.POD, "q"),
    CardField("previous_stack_index", FieldKind.POD, "q"),
    _vector_field("previous_visual_position"),
    CardField("in_transaction_id", FieldKind.POD, "I"),
    CardField("did_physical_move", FieldKind.POD, "?"),
    CardField("row_position", FieldKind.POD, "q"),
    CardField("z_layer", FieldKind.POD, "q"),
    CardField("visual_end_z_layer", FieldKind.POD, "q"),
    CardField("visual_start_z_layer", FieldKind.POD, "q"),
    CardField(
        "hitbox", FieldKind.POD, "dddd", lambda r: (r.x, r.y, r.w, r.h), lambda p: Rect(*p)
    ),
    _vector_field("visual_start"),
    _vector_field("visual_position"),
    _vector_field("visual_end"),
    CardField("visual_move_type", FieldKind.POD, "B", _single, lambda p: MoveType(p[0])),
    CardField("visual_start_time", FieldKind.POD, "d"),
    CardField("visual_elapsed", FieldKind.POD, "d"),
    CardField("visual_duration", FieldKind.POD, "d"),
    CardField("highlight_duration", FieldKind.POD, "d"),
    CardField("should_highlight", FieldKind.POD, "?"),
)

assert len(_CARD_FIELDS) <= MAX_CARD_FIELDS


def card_fields() -> Tuple[CardField, ...]:
    """The card fields tracked by undo, in the order their indices refer to."""
    return _CARD_FIELDS


def copy_card_data(src: Card, dest: Card) -> None:
    """Copy every tracked field of ``src`` onto ``dest``, which must be the same card."""
    if src.card_type != dest.card_type:
        raise ValueError(f"card types differ: {src.card_type!r} and {dest.card_type!r}")
    if src.card_id != dest.card_id:
        raise ValueError(f"card ids differ: {src.card_id} and {dest.card_id}")
    for card_field in _CARD_FIELDS:
        setattr(dest, card_field.name, getattr(src, card_field.name))


def clone_card(card: Card) -> Card:
    """A new card holding a snapshot of the tracked state of ``card``."""
    result = Card(card_id=card.card_id, card_type=card.card_type, derived=card.derived)
    copy_card_data(card, result)
    return result


def diff_card(card_old: Card, card_new: Card, builder: StringBuilder) -> int:
    """Write the fields that differ between two states of a card; return their number."""
    if card_old.card_type != card_new.card_type:
        raise ValueError(f"card types differ: {card_old.card_type!r} and {card_new.card_type!r}")

    slot_count = 0
    slot_position = None
    for index, card_field in enumerate(_CARD_FIELDS):
        old = card_field.encode(card_old)
        new = card_field.encode(card_new)
        if old == new:
            continue
        if slot_position is None:
            builder.put(card_old.card_id, "I")
            slot_position = builder.placeholder("B")
        slot_count += 1
        builder.put(index, "B")
        if card_field.kind is FieldKind.POD:
            builder.put_pair(old, new)
        else:
            builder.put_string(old)
            builder.put_string(new)

    if slot_position is not None:
        builder.patch(slot_position, slot_count, "B")
    return slot_count


def apply_diff(card: Card, num_slots_changed: int, reader: ByteReader, apply_forward: bool) -> None:
    """Apply the new (forward) or old (backward) values of changed fields to ``card``."""
    for _ in range(num_slots_changed):
        index = reader.get("B")
        try:
            card_field = _CARD_FIELDS[index]
        except IndexError:
            raise ValueError(f"undo record names unknown field index {index}") from None

        if card_field.kind is FieldKind.POD:
            size = card_field.size
            if apply_forward:
                reader.advance(size)
                data = reader.consume(size)
            else:
                data = reader.consume(size)
                reader.advance(size)
        else:
            if apply_forward:
                reader.discard_string()
                data = reader.get_string()
            else:
                data = reader.get_string()
                reader.discard_string()
        setattr(card, card_field.name, card_field.decode(data))


@dataclass(eq=False)
class EntityManager:
    """The cards and stacks of one game, with the undo handler watching them."""

    all_cards: List[Card] = field(default_factory=list)
    all_stacks: List[Stack] = field(default_factory=list)
    undo_handler: Optional["UndoHandler"] = None

    def __post_init__(self) -> None:
        for card in self.all_cards:
            card.entity_manager = self

    def find_card(self, card_id: int) -> Optional[Card]:
        """The card with ``card_id``, or None."""
        for card in self.all_cards:
            if card.card_id == card_id:
                return card
        return None


def _revert_card_to_stack(
    manager: EntityManager, card: Card, old_stack_index: int, old_row_position: int
) -> None:
    if card.in_stack_index == old_stack_index and card.row_position == old_row_position:
        return
    if card.entity_manager is not None and card.entity_manager is not manager:
        raise ValueError(f"card {card.card_id} belongs to another entity manager")

    stack = manager.all_stacks[card.in_stack_index]
    if stack.stack_type is StackType.DRAGGING:
        raise ValueError("cannot undo a card into the dragging stack")
    add_at_index(stack.cards, card, card.row_position)

    old_stack = manager.all_stacks[old_stack_index]
    if old_stack.stack_index != old_stack_index:
        raise ValueError(f"stack at position {old_stack_index} has index {old_stack.stack_index}")
    if old_stack.stack_type is StackType.DRAGGING:
        raise ValueError("cannot undo a card out of the dragging stack")
    # Which card leaves the old stack does not matter: it is rebuilt as the undo goes on.
    old_stack.cards.pop()


class UndoHandler:
    """Records per-frame card changes and rolls them back on request."""

    def __init__(self) -> None:
        self.manager: Optional[EntityManager] = None
        self.undo_records: List[bytes] = []
        self.cached_card_states: Table[int, Card] = Table()
        self.dirty = False
        self.enabled = False

    def mark_beginning(self, manager: EntityManager) -> None:
        """Start recording for ``manager``, dropping any earlier records."""
        self.enabled = True
        self.manager = manager
        manager.undo_handler = self

        self.undo_records.clear()
        self.cached_card_states.reset()
        for card in manager.all_cards:
            self.cached_card_states.add(card.card_id, clone_card(card))

    def end_frame(self) -> Optional[bytes]:
        """Record what changed since the last frame; return the record."""
        if not self.enabled:
            return None
        if self.manager is None:
            raise RuntimeError("undo handler has no entity manager")

        builder = StringBuilder()
        count_position = builder.placeholder("H")
        counter = 0
        for card in self.manager.all_cards:
            if card.visual_start_time >= 0:
                raise ValueError(f"card {card.card_id} is still animating")
            cached = self.cached_card_states.find(card.card_id)
            if diff_card(cached, card, builder):
                counter += 1
                self.cached_card_states.set(card.card_id, clone_card(card))
        builder.patch(count_position, counter, "H")

        record = builder.to_bytes()
        self.dirty = True
        self.undo_records.append(record)
        return record

    def _apply_record(self, record: bytes, is_redo: bool) -> None:
        manager = self.manager
        if manager is None:
            raise RuntimeError("undo handler has no entity manager")
        reader = ByteReader(record)
        while reader:
            num_cards_changed = reader.get("H")
            for _ in range(num_cards_changed):
                card_id = reader.get("I")
                num_slots_changed = reader.get("B")

                card_dest = manager.find_card(card_id)
                if card_dest is None:
                    raise LookupError(f"no card with id {card_id}")
                cached = self.cached_card_states.find(card_id)

                apply_diff(cached, num_slots_changed, reader, is_redo)

                old_stack_index = card_dest.in_stack_index
                old_row_position = card_dest.row_position
                copy_card_data(cached, card_dest)

                card_dest.reset_visual_interpolation()
                _revert_card_to_stack(manager, card_dest, old_stack_index, old_row_position)

    def do_one_undo(self) -> bool:
        """Undo the latest recorded frame; False when there is nothing to undo."""
        if not self.undo_records:
            return False
        record = self.undo_records.pop()
        self._apply_record(record, is_redo=False)
        return True