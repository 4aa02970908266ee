# solitable

Building blocks for a solitaire card game, usable on their own:

- `solitable.table`: `Table`, an open-addressing hash table with quadratic
  probing, a configurable load factor and tombstone-aware growth. It can hold
  several entries under one key (`add`, `find_multiple`). `find` and `remove`
  raise `KeyError` when the key is absent.
- `solitable.string_builder`: `StringBuilder` packs binary records into
  fixed-size chunks. It offers `put`, `put_string`, and `placeholder`/`patch`
  for values that are filled in later. `ByteReader` reads those records back
  with `get`, `consume`, `get_string` and the related methods. Values are
  little-endian by default.
- `solitable.time_info`: `Clock` and `TimeInfo`, a game clock with a time rate
  and a clamped per-frame delta. It takes an optional time source.
- `solitable.arrays`: list helpers such as `unordered_remove_by_index`,
  `add_if_unique`, `add_at_index`, `peek_last` and a Lomuto `quicksort`.
- `solitable.entities`: `Card`, `Stack`, `Vector2`, `Rect`,
  `DefaultGameVisuals` and the enums `ShenzhenColor`, `SawayamaColor`,
  `MoveType` and `StackType`.
- `solitable.texture`: `TextureFormat`, `Bitmap`, `bytes_per_texel`,
  `format_for_channels` and `ogl_format`. `ogl_format` maps a format to its
  OpenGL upload parameters as plain integer constants.
- `solitable.undo`: `UndoHandler` records per-frame card diffs into compact
  binary records and rolls them back. `EntityManager` holds the cards and
  stacks it watches.

## Installing

```
pip install .
```

## Example

```python
from solitable.table import Table
from solitable.entities import Card
from solitable.undo import EntityManager, UndoHandler

table = Table()
table.add("hearts", 1)
assert table.find("hearts") == 1
assert "spades" not in table

card = Card(card_id=1)
manager = EntityManager(all_cards=[card])

handler = UndoHandler()
handler.mark_beginning(manager)
card.z_layer = 5
handler.end_frame()
handler.do_one_undo()
assert card.z_layer == 0
```

## What it does not do

The package holds data structures and bookkeeping only. It has no game
rules and no window or rendering. It does not load images or textures from
disk and does not talk to OpenGL. The texture module only describes formats
and sizes. There is no command to run.

## Running the tests

```
pip install .[test]
pytest
```