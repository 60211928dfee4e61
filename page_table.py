class IPTEntry:
    def __init__(self):
        self.owner = None  # Index of the workload whose page sits in this frame
        self.page_num = None
        self.timestamp = 0  # For LRU
        self.modified = False
        self.valid = False  # False means the frame is free

    def matches(self, owner, page_num):
        return self.valid and self.owner == owner and self.page_num == page_num


class InvertedPageTable:
    """One entry per physical frame, positionally paired with the frame store."""

    def __init__(self, num_frames):
        self.entries = [IPTEntry() for _ in range(num_frames)]

    def get_entry(self, frame_num):
        return self.entries[frame_num]

    def find(self, owner, page_num):
        for frame_num, entry in enumerate(self.entries):
            if entry.matches(owner, page_num):
                return frame_num
        return None

    def find_free(self):
        for frame_num, entry in enumerate(self.entries):
            if not entry.valid:
                return frame_num
        return None

    def install(self, frame_num, owner, page_num):
        # Timestamp is left to the caller, it tracks the last touch, not the load
        entry = self.entries[frame_num]
        entry.owner = owner
        entry.page_num = page_num
        entry.modified = False
        entry.valid = True

    def touch(self, frame_num, timestamp):
        self.entries[frame_num].timestamp = timestamp

    def used_frames(self):
        return sum(1 for entry in self.entries if entry.valid)
