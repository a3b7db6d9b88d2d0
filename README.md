# keyids

`keyids` hands out small integer ids for string keys and remembers which key
owns which id. It is safe to use from several threads.

- Ids run from 1 up to the configured range (at most 2000); id 0 is never
  handed out.
- Asking again for a key that already has an id returns that same id.
- A deleted id is not reused until more than three seconds have passed since
  it was freed. The search for a free id continues round-robin from the last
  id handed out, so it never jumps back to an id that was just released.
- Keys must be non-empty and at most 127 bytes long once encoded as UTF-8.

## Installation

```
pip install .
```

## Usage

```python
from keyids.id_allocator import IdAllocator, InvalidIdError, UnknownIdError

ids = IdAllocator(2000)

a = ids.create("alpha")        # 1
b = ids.create("beta")         # 2
assert ids.create("alpha") == a

print(ids.query(b))            # "beta"
print(ids.format_all(), end="")  # "1 alpha\n2 beta\n"

ids.delete(a)
ids.create("alpha")            # 3: id 1 is still cooling off

try:
    ids.query(a)
except UnknownIdError:
    print("id", a, "is not in use")

try:
    ids.delete(10000)
except InvalidIdError:
    print("out of range")
```

`IdAllocator(range_=2000, clock=None)` accepts a range from 1 to 2000 and
raises `ValueError` otherwise.

- `create(key)` returns the key's id, allocating one if needed. It raises
  `keyids.hashmap.KeyTooLongError` for a key over 127 bytes, `ValueError` for
  an empty key, and `keyids.bitmap.NoIdsAvailableError` when every id is in
  use or still cooling off.
- `delete(id_)` and `query(id_)` raise `InvalidIdError` for an id outside
  1..2000 and `UnknownIdError` for an id that has no key.
- `items()` yields `(id, key)` pairs in ascending id order; `format_all()`
  returns them as `"<id> <key>"` lines, each ending in a newline.

A `clock` returning integer microseconds can be passed to `IdAllocator` or
`IdBitmap` in place of the wall clock (`keyids.bitmap.now_us`), which helps
when testing the cool-off behaviour.

Creating a new id and finding an existing one are logged at `INFO` level
through the standard `logging` module, under the `keyids.id_allocator`
logger.

### Building blocks

The allocator is made of two parts that can also be used on their own:

- `keyids.bitmap.IdBitmap(range_, clock=None)` marks ids as used or free.
  `allocate()` returns the next usable id or raises `NoIdsAvailableError`;
  `free(id_)` releases an id and starts its cool-off, raising `ValueError` for
  an id out of range or already free; `is_set(id_)` tells whether an id is
  taken; `len()` counts the ids in use.
- `keyids.hashmap.KeyHashTable(range_)` is a chained hash table from keys to
  ids with `2 * range_` buckets. `insert(key, id_)` raises `KeyTooLongError`
  for keys over 127 bytes; `lookup(key)` and `find(index, key)` return the id
  or `None`; `remove(key)` raises `KeyError` if the key is absent;
  `index_of(key)` gives a key's bucket. `keyids.hashmap.hash_key(key)` is the
  hash it uses.

## What it does not do

`keyids` is a library only: it has no command-line tool, and it keeps all
assignments in memory, so nothing survives the end of the process.

## Running the tests

```
pip install .[test]
pytest
```