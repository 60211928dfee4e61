from page_table import InvertedPageTable


def test_empty_table():
    ipt = InvertedPageTable(3)

    assert len(ipt.entries) == 3
    assert ipt.find(0, 0) is None
    assert ipt.find_free() == 0
    assert ipt.used_frames() == 0


def test_install_and_find():
    ipt = InvertedPageTable(3)
    ipt.install(0, 0, 42)
    ipt.install(1, 1, 42)

    assert ipt.find(0, 42) == 0
    assert ipt.find(1, 42) == 1
    assert ipt.find(0, 43) is None
    assert ipt.find_free() == 2
    assert ipt.used_frames() == 2


def test_install_clears_modified_but_keeps_timestamp():
    ipt = InvertedPageTable(1)
    ipt.install(0, 0, 1)
    ipt.touch(0, 5)
    ipt.get_entry(0).modified = True

    ipt.install(0, 1, 2)

    entry = ipt.get_entry(0)
    assert (entry.owner, entry.page_num) == (1, 2)
    assert not entry.modified
    assert entry.timestamp == 5
    assert ipt.find(0, 1) is None


def test_full_table_has_no_free_frame():
    ipt = InvertedPageTable(2)
    ipt.install(0, 0, 1)
    ipt.install(1, 0, 2)

    assert ipt.find_free() is None
