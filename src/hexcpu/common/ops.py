# Data movement
MOV1 = 0x0  # M[D2] -> R1
MOV2 = 0x1  # R1 -> M[D2]
MOV3 = 0x2  # R2 -> M[R1]
MOV4 = 0x3  # U2 -> M[R1]

# Arithmetic
ADD = 0x4  # R2 + R3 -> R1
SUBT = 0x5  # R2 - R3 -> R1
MUL = 0x8  # R2 * R3 -> R1

# Flow
JZ = 0x6  # if R1 .ne 0 jmp U2
HALT = 0xF

# Memory and output
READM = 0x7  # U1 -> OUT[TIME]
LOAD = 0xA  # M[R2] -> R1
