INVALID = -1


class WorkingSet:
    """Fixed-capacity recency queue of page numbers, oldest slot first.

    Inserting always drops the head slot, even when the page is already
    present, so a page can occupy several slots at once.
    """

    def __init__(self, size):
        self.size = size
        self.slots = [INVALID] * size

    def insert(self, page_num):
        self.slots = self.slots[1:] + [page_num]

    def remove(self, page_num):
        # Only the first occurrence is released
        for i, slot in enumerate(self.slots):
            if slot == page_num:
                self.slots[i] = INVALID
                break

    def includes(self, page_num):
        return page_num in self.slots
