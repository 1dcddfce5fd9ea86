'''
This module contains the four-character codes of the boxes the library knows
how to decode; every other code maps to BoxType.UNKNOWN.

Note: use Enum for value that cannot ORed together, Flag for the others.
'''
from enum import Enum


class BoxType(Enum):
    UNKNOWN = None
    UDTA    = b'udta'  # user data
    META    = b'meta'  # metadata
    HDLR    = b'hdlr'  # handler reference

    def __str__(self):
        return self.value.decode('latin-1') if self.value else self.name

    @classmethod
    def lookup(cls, code) -> "BoxType":
        '''Return the member for the given code, UNKNOWN if the code is not recognized.'''
        if isinstance(code, str):
            code = code.encode('latin-1')

        if code is None:
            return cls.UNKNOWN

        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN
