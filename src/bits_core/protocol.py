"""BITS transmission protocol constants.

Single source of truth for the bit-level packet layout.
Keep this file stable. Parser and generator must remain synchronized.
"""

# Packet header: [Version(3) | TypeID(3)]
VERSION_BITS = 3
TYPE_ID_BITS = 3

# Literal payload: repeating [Continue(1) | Nibble(4)] groups
LITERAL_TYPE_ID = 4
LITERAL_GROUP_BITS = 5
LITERAL_NIBBLE_BITS = 4
LITERAL_CONTINUE_MASK = 0b10000
LITERAL_NIBBLE_MASK = 0b01111
LITERAL_MAX_BITS = 64

# Operator payload: [LengthTypeID(1) | TotalBits(15) or Count(11) | sub-packets...]
LENGTH_TYPE_BITS = 1
LENGTH_TYPE_TOTAL_BITS = 0
LENGTH_TYPE_COUNT = 1
TOTAL_LENGTH_BITS = 15
SUB_PACKET_COUNT_BITS = 11

# Operator type ids (4 is the literal)
OP_SUM = 0
OP_PRODUCT = 1
OP_MINIMUM = 2
OP_MAXIMUM = 3
OP_GREATER_THAN = 5
OP_LESS_THAN = 6
OP_EQUAL_TO = 7

# Cursor reads are limited to one 64-bit word
MAX_READ_BITS = 64

# Default safety bounds
DEFAULT_MAX_DEPTH = 256  # nested operator levels per transmission

# Runner defaults
DEFAULT_INPUT_PATH = "data/input.txt"
