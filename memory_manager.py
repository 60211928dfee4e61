FRAME_SIZE = 4096


class PhysicalMemory:
    def __init__(self, num_frames, frame_size=FRAME_SIZE):
        self.num_frames = num_frames
        self.frame_size = frame_size
        # Payload is never interpreted, frames only need to be addressable
        self.frames = [bytearray(frame_size) for _ in range(num_frames)]

    def _check_offset(self, offset):
        if not 0 <= offset < self.frame_size:
            raise IndexError(f"Offset {offset} outside frame of {self.frame_size} bytes")

    def read(self, frame_num, offset):
        self._check_offset(offset)
        return self.frames[frame_num][offset]

    def write(self, frame_num, offset, value=0):
        self._check_offset(offset)
        self.frames[frame_num][offset] = value & 0xFF


class Statistics:
    def __init__(self, workload_names, num_frames):
        self.num_frames = num_frames
        self.reference_count = 0
        self.load_count = 0
        self.save_count = 0
        self.page_faults = {name: 0 for name in workload_names}
        self.resolved = {name: 0 for name in workload_names}
        self.used_frames = 0

    def record_reference(self, name):
        self.reference_count += 1
        self.resolved[name] += 1

    def record_page_fault(self, name):
        self.page_faults[name] += 1

    def record_load(self):
        self.load_count += 1

    def record_save(self):
        self.save_count += 1

    def __str__(self):
        lines = [
            f"LOAD from hard disk to main memory (aka read from HD): {self.load_count} pages",
            f"SAVE from main memory to hard disk (aka write to HD): {self.save_count} pages",
        ]
        for name in self.resolved:
            lines.append(f"{name}: {self.page_faults[name]} page faults, "
                         f"{self.resolved[name]} resolved references")
        lines.append(f"During this simulation: {self.used_frames} frames were used "
                     f"of {self.num_frames} available frames")
        return "\n".join(lines)
