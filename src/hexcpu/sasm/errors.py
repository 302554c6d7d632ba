''' Assembly errors '''


class AsmError(Exception):
    pass


class InstructionError(AsmError):
    ''' Mnemonic token not found in a line '''
    pass


class UnknownInstruction(InstructionError):
    pass


class OperandError(InstructionError):
    ''' Operand text does not match the opcode's shape '''
    pass


class EncodingOverflow(AsmError):
    pass


class ConfigurationError(Exception):
    ''' Opcode table is inconsistent '''
    pass
