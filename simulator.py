import argparse
import sys
from pathlib import Path

from page_table import InvertedPageTable
from memory_manager import PhysicalMemory, Statistics
from working_set import WorkingSet
from reference_trace import READ, WRITE, read_trace

ALGORITHMS = ('LRU', 'WS')
DEFAULT_TRACES = ['bzip.trace', 'gcc.trace']


class ConfigurationError(ValueError):
    pass


class SimulationError(Exception):
    pass


class InvalidActionError(SimulationError):
    def __init__(self, workload, action):
        super().__init__(f"Invalid reference detected in file {workload} (action {action!r})")
        self.workload = workload
        self.action = action


class WorkingSetUnsatisfiableError(SimulationError):
    def __init__(self, ws_size, num_frames):
        super().__init__(f"Given working set size ({ws_size}) cannot be satisfied "
                         f"by {num_frames} frames")
        self.ws_size = ws_size
        self.num_frames = num_frames


class Workload:
    def __init__(self, name, references):
        self.name = name
        self.references = iter(references)
        self.working_set = None  # Only used by WS
        self.exhausted = False

    def next_reference(self):
        if self.exhausted:
            return None
        try:
            return next(self.references)
        except StopIteration:
            self.exhausted = True
            return None

    def close(self):
        # Trace generators hold an open file until closed
        close = getattr(self.references, 'close', None)
        if close is not None:
            close()


class VirtualMemorySimulator:

    def __init__(self, algorithm='LRU', num_frames=32, q=1, ws_size=None,
                 max_num_of_references=None, listener=None):
        if algorithm not in ALGORITHMS:
            raise ConfigurationError(f"Unknown algorithm: {algorithm}")
        if num_frames < 1:
            raise ConfigurationError("Number of frames must be positive")
        if q < 1:
            raise ConfigurationError("q must be positive")
        if algorithm == 'WS':
            if ws_size is None:
                raise ConfigurationError("WS algorithm requires a working set size")
            if ws_size < 1:
                raise ConfigurationError("Working set size must be positive")
        if max_num_of_references is not None and max_num_of_references < 1:
            raise ConfigurationError("Max number of references must be positive")

        self.algorithm = algorithm
        self.num_frames = num_frames
        self.q = q
        self.ws_size = ws_size
        self.max_num_of_references = max_num_of_references
        self.listener = listener  # Called with (kind, details) for every event
        self.workloads = []
        self.physical_memory = None
        self.ipt = None
        self.stats = None

    def emit(self, kind, **details):
        if self.listener is not None:
            self.listener(kind, details)

    def reset(self, workloads):
        names = [workload.name for workload in workloads]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Workload names must be unique: {names}")

        self.workloads = list(workloads)
        self.physical_memory = PhysicalMemory(self.num_frames)
        self.ipt = InvertedPageTable(self.num_frames)
        self.stats = Statistics(names, self.num_frames)
        for workload in self.workloads:
            workload.working_set = WorkingSet(self.ws_size) if self.algorithm == 'WS' else None

    def handle_memory_reference(self, owner, reference):
        """Resolve one reference of workload ``owner``.

        Returns ``(frame_num, page_fault, saved)``.
        """
        workload = self.workloads[owner]
        self.stats.record_reference(workload.name)
        self.emit('reference', workload=workload.name,
                  count=self.stats.resolved[workload.name],
                  overall=self.stats.reference_count, reference=reference)

        page_fault = False
        saved = False
        frame_num = self.ipt.find(owner, reference.page_num)

        if frame_num is None:
            page_fault = True
            self.stats.record_page_fault(workload.name)
            frame_num = self.ipt.find_free()
            if frame_num is None:
                frame_num = self.select_victim_page(owner)
                saved = self.evict_page(frame_num)
            self.load_page(frame_num, owner, reference.page_num)

        # Timestamps of two consecutive references differ by 1
        self.ipt.touch(frame_num, self.stats.reference_count)

        if reference.action == READ:
            self.physical_memory.read(frame_num, reference.offset)
            self.emit('read', page_num=reference.page_num, frame_num=frame_num)
        elif reference.action == WRITE:
            self.physical_memory.write(frame_num, reference.offset)
            self.ipt.get_entry(frame_num).modified = True
            self.emit('write', page_num=reference.page_num, frame_num=frame_num)
        else:
            raise InvalidActionError(workload.name, reference.action)

        if workload.working_set is not None:
            workload.working_set.insert(reference.page_num)

        return frame_num, page_fault, saved

    def load_page(self, frame_num, owner, page_num):
        self.ipt.install(frame_num, owner, page_num)
        self.stats.record_load()
        self.emit('load', page_num=page_num, frame_num=frame_num)

    def evict_page(self, frame_num):
        entry = self.ipt.get_entry(frame_num)
        if entry.modified:
            self.stats.record_save()
            self.emit('save', page_num=entry.page_num, frame_num=frame_num)
        return entry.modified

    def select_victim_page(self, owner):
        # Algorithm name is validated by the constructor
        if self.algorithm == 'LRU':
            return self.select_victim_lru()
        return self.select_victim_ws(owner)

    def select_victim_lru(self):
        # Global: either workload's page may be replaced
        victim_frame = 0
        lru_time = self.ipt.get_entry(0).timestamp

        for frame_num, entry in enumerate(self.ipt.entries):
            if entry.timestamp < lru_time:
                lru_time = entry.timestamp
                victim_frame = frame_num

        return victim_frame

    def select_victim_ws(self, owner):
        # A page outside its own owner's working set is free to go
        for frame_num, entry in enumerate(self.ipt.entries):
            working_set = self.workloads[entry.owner].working_set
            if not working_set.includes(entry.page_num):
                return frame_num

        # Every resident page is in a working set, so take one from another workload
        for frame_num, entry in enumerate(self.ipt.entries):
            if entry.owner != owner:
                victim = self.workloads[entry.owner]
                self.emit('disturb', workload=self.workloads[owner].name, victim=victim.name)
                victim.working_set.remove(entry.page_num)
                return frame_num

        raise WorkingSetUnsatisfiableError(self.ws_size, self.num_frames)

    def budget_reached(self):
        return (self.max_num_of_references is not None
                and self.stats.reference_count >= self.max_num_of_references)

    def is_done(self):
        return self.budget_reached() or all(w.exhausted for w in self.workloads)

    def run_turn(self, owner):
        workload = self.workloads[owner]
        for _ in range(self.q):
            if self.budget_reached():
                break
            reference = workload.next_reference()
            if reference is None:
                break
            self.handle_memory_reference(owner, reference)

    def run_simulation(self, workloads):
        self.reset(workloads)
        try:
            turn = 0
            while not self.is_done():
                self.run_turn(turn % len(self.workloads))
                turn += 1
        finally:
            for workload in self.workloads:
                workload.close()

        self.stats.used_frames = self.ipt.used_frames()
        return self.stats


def load_workloads(filenames):
    return [Workload(Path(filename).stem, read_trace(filename)) for filename in filenames]


def print_event(kind, details):
    if kind == 'reference':
        ref = details['reference']
        print(f"Reference {details['count']} of {details['workload']} "
              f"({details['overall']} overall): page {ref.page_num}, offset {ref.offset}, {ref.action}")
    elif kind == 'load':
        print(f"LOAD page {details['page_num']} from hard disk to frame "
              f"{details['frame_num']} of main memory")
    elif kind == 'save':
        print(f"SAVE page {details['page_num']} from frame {details['frame_num']} "
              f"of main memory to hard disk")
    elif kind == 'read':
        print(f"READ page {details['page_num']} from frame {details['frame_num']} of main memory")
    elif kind == 'write':
        print(f"WRITE page {details['page_num']} to frame {details['frame_num']} of main memory")
    elif kind == 'disturb':
        print(f"NOTE: Due to memory restriction {details['workload']} had to disturb "
              f"{details['victim']}'s working set in order to keep running")


USAGE = """\
To execute using LRU algorithm:
  simulator.py LRU <num_of_frames> <q> [max_num_of_references]

To execute using WS algorithm:
  simulator.py WS <num_of_frames> <q> <ws_size> [max_num_of_references]

NOTE: It is optional to provide <max_num_of_references>"""


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Inverted page table simulator for LRU and Working Set replacement',
        epilog=USAGE, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument('algorithm', choices=ALGORITHMS)
    parser.add_argument('numbers', nargs='+', type=int, metavar='N')
    parser.add_argument('--trace', action='append', dest='traces', metavar='PATH',
                        help='trace file of one workload, repeat for each (default: bzip.trace gcc.trace)')
    parser.add_argument('--verbose', action='store_true', help='print every simulation event')
    args = parser.parse_args(argv)
    if args.traces is None:
        args.traces = DEFAULT_TRACES

    args.ws_size = None
    args.max_num_of_references = None
    if args.algorithm == 'LRU':
        if len(args.numbers) not in (2, 3):
            parser.error("LRU takes <num_of_frames> <q> [max_num_of_references]")
        args.num_frames, args.q = args.numbers[:2]
        if len(args.numbers) == 3:
            args.max_num_of_references = args.numbers[2]
    else:
        if len(args.numbers) not in (3, 4):
            parser.error("WS takes <num_of_frames> <q> <ws_size> [max_num_of_references]")
        args.num_frames, args.q, args.ws_size = args.numbers[:3]
        if len(args.numbers) == 4:
            args.max_num_of_references = args.numbers[3]
    return args


def main(argv=None):
    args = parse_args(argv)

    print("\nSpecifications:")
    print(f"Algorithm: {args.algorithm}")
    print(f"Number of frames: {args.num_frames}")
    print(f"Number q: {args.q}")
    if args.ws_size is not None:
        print(f"Working set size: {args.ws_size}")
    if args.max_num_of_references is not None:
        print(f"Max number of references: {args.max_num_of_references}")

    for filename in args.traces:
        if not Path(filename).is_file():
            print(f"ERROR: Trace file not found: {filename}")
            return 1

    try:
        simulator = VirtualMemorySimulator(
            algorithm=args.algorithm, num_frames=args.num_frames, q=args.q,
            ws_size=args.ws_size, max_num_of_references=args.max_num_of_references,
            listener=print_event if args.verbose else None)
        print("\nSimulation:")
        stats = simulator.run_simulation(load_workloads(args.traces))
    except (ConfigurationError, SimulationError, OSError) as e:
        print(f"ERROR: {e}")
        return 1
    except MemoryError:
        print("ERROR: An error occured during memory allocation")
        return 1

    print("\nResults:")
    print(stats)
    return 0


if __name__ == '__main__':
    sys.exit(main())
