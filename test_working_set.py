from working_set import INVALID, WorkingSet


def test_starts_empty():
    ws = WorkingSet(3)

    assert ws.slots == [INVALID, INVALID, INVALID]
    assert not ws.includes(0)


def test_insert_shifts_out_oldest():
    ws = WorkingSet(3)
    for page in [1, 2, 3, 4]:
        ws.insert(page)

    assert ws.slots == [2, 3, 4]
    assert not ws.includes(1)
    assert len(ws.slots) == 3


def test_insert_keeps_duplicates():
    ws = WorkingSet(3)
    ws.insert(7)
    ws.insert(7)

    assert ws.slots == [INVALID, 7, 7]


def test_remove_releases_first_occurrence_only():
    ws = WorkingSet(3)
    for page in [5, 6, 5]:
        ws.insert(page)

    ws.remove(5)

    assert ws.slots == [INVALID, 6, 5]
    assert ws.includes(5)


def test_remove_missing_page_is_noop():
    ws = WorkingSet(2)
    ws.insert(1)
    ws.remove(9)

    assert ws.slots == [INVALID, 1]
