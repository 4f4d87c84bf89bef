from __future__ import annotations

from block_drop.game import HiScoreStore


def test_missing_file_reads_zero(tmp_path):
    assert HiScoreStore(str(tmp_path / "none")).read() == 0


def test_write_stores_big_endian_int(tmp_path):
    path = tmp_path / "hiscore"
    store = HiScoreStore(str(path))
    store.write(258)
    assert path.read_bytes() == b"\x00\x00\x01\x02"
    assert store.read() == 258


def test_write_replaces_previous_record(tmp_path):
    store = HiScoreStore(str(tmp_path / "hiscore"))
    store.write(70000)
    store.write(12)
    assert store.read() == 12


def test_short_record_reads_zero(tmp_path):
    path = tmp_path / "hiscore"
    path.write_bytes(b"\x01\x02")
    assert HiScoreStore(str(path)).read() == 0


def test_unreadable_path_reads_zero(tmp_path):
    # a directory cannot be opened as a record
    assert HiScoreStore(str(tmp_path)).read() == 0


def test_write_failure_is_swallowed(tmp_path):
    store = HiScoreStore(str(tmp_path / "missing-dir" / "hiscore"))
    store.write(99)
    assert store.read() == 0
