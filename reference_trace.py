import math

from memory_manager import FRAME_SIZE

LOGICAL_ADDRESS_BITS = 32
READ = 'R'
WRITE = 'W'


def offset_bits(frame_size=FRAME_SIZE):
    # Offset must be able to address every byte of a frame
    return int(math.log2(frame_size))


def page_num_bits(frame_size=FRAME_SIZE):
    return LOGICAL_ADDRESS_BITS - offset_bits(frame_size)


def hex_digits(num_bits):
    return math.ceil(num_bits / 4)


class Reference:
    def __init__(self, page_num, offset, action):
        self.page_num = page_num
        self.offset = offset
        self.action = action

    def __eq__(self, other):
        if not isinstance(other, Reference):
            return NotImplemented
        return (self.page_num, self.offset, self.action) == \
            (other.page_num, other.offset, other.action)

    def __repr__(self):
        return f"Reference(page_num={self.page_num}, offset={self.offset}, action={self.action!r})"


def decode_record(record, frame_size=FRAME_SIZE):
    """Split one fixed-width record, e.g. ``0041f7a0 R``, into a Reference.

    The leading hex digits hold the page number, the following ones the
    offset, then a separator and the action character. The action is not
    validated here.
    """
    page_digits = hex_digits(page_num_bits(frame_size))
    offset_digits = hex_digits(offset_bits(frame_size))
    address_digits = page_digits + offset_digits

    page_num = int(record[:page_digits], 16)
    offset = int(record[page_digits:address_digits], 16)
    action = record[address_digits + 1:address_digits + 2]
    return Reference(page_num, offset, action)


def read_trace(filename, frame_size=FRAME_SIZE):
    with open(filename, 'r') as f:
        for line in f:
            record = line.rstrip('\r\n')
            if not record.strip():
                continue
            yield decode_record(record, frame_size)
