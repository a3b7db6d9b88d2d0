import pytest

from keyids.hashmap import (
    MAX_KEY_SIZE,
    KeyHashTable,
    KeyTooLongError,
    hash_key,
)


def test_hash_of_empty_key_is_zero():
    assert hash_key("") == 0


def test_hash_single_char_worked_example():
    # 'a' is 97; 97 ^ 2 == 99, weighted by position 1.
    assert hash_key("a") == 99


def test_hash_is_order_sensitive():
    assert hash_key("ab") != hash_key("ba")


def test_hash_of_non_ascii_stays_unsigned_64_bit():
    value = hash_key("\u00e9t\u00e9")
    assert 0 <= value < 2**64


def test_index_within_table():
    table = KeyHashTable(10)
    for key in ["x", "key_1", "test3", "A" * MAX_KEY_SIZE]:
        assert 0 <= table.index_of(key) < 20


def test_insert_then_lookup():
    table = KeyHashTable(10)
    table.insert("alpha", 7)
    assert table.lookup("alpha") == 7
    assert table.find(table.index_of("alpha"), "alpha") == 7


def test_lookup_missing_is_none():
    table = KeyHashTable(10)
    assert table.lookup("missing") is None


def test_newest_entry_wins():
    table = KeyHashTable(10)
    table.insert("dup", 1)
    table.insert("dup", 2)
    assert table.lookup("dup") == 2
    table.remove("dup")
    assert table.lookup("dup") == 1


def test_remove_then_lookup_is_none():
    table = KeyHashTable(10)
    table.insert("gone", 3)
    table.remove("gone")
    assert table.lookup("gone") is None


def test_remove_missing_raises():
    table = KeyHashTable(10)
    with pytest.raises(KeyError):
        table.remove("nothing")


def test_colliding_keys_kept_apart():
    table = KeyHashTable(1)
    keys = [f"k{i}" for i in range(8)]
    for id_, key in enumerate(keys, start=1):
        table.insert(key, id_)
    same_bucket = [k for k in keys if table.index_of(k) == table.index_of(keys[0])]
    assert len(same_bucket) >= 2
    for id_, key in enumerate(keys, start=1):
        assert table.lookup(key) == id_
    table.remove(same_bucket[-1])
    assert table.lookup(same_bucket[-1]) is None
    assert table.lookup(same_bucket[0]) == keys.index(same_bucket[0]) + 1


def test_max_size_key_accepted():
    table = KeyHashTable(4)
    key = "A" * MAX_KEY_SIZE
    table.insert(key, 2)
    assert table.lookup(key) == 2


def test_too_long_key_rejected():
    table = KeyHashTable(4)
    key = "A" * (MAX_KEY_SIZE + 1)
    with pytest.raises(KeyTooLongError):
        table.insert(key, 1)
    assert table.lookup(key) is None


def test_invalid_range_rejected():
    with pytest.raises(ValueError):
        KeyHashTable(0)