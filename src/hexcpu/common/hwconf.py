REGISTERS        = 16           # R0..R15
MEMORY_SIZE      = 256          # byte-addressable cells

WORD_BITS        = 16
OPCODE_BITS      = 4
FIELD_BITS       = 4
FIELDS           = 3            # operand fields after the opcode
WORD_DIGITS      = WORD_BITS // 4
WORD_FORMAT      = '>H'         # binary image word layout

COMMENT          = '#'
REG_MARKER       = 'R'
