from enum import Enum, Flag, auto


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE    = 0
    BOUNDS  = 1 << 0  # a child must fit in the bytes remaining in its container
    INHERIT = 1 << 1


class ChunkPhase(Enum):
    '''Enum to state the actual phase of a chunk'''
    INIT        = 0
    RELAYOUTING = auto()
    PACKING     = auto()
    UNPACKING   = auto()
    DONE        = auto()
    ERROR       = auto()
