'''
Values fixed by the ISO base media file format, plus the limits used while
traversing untrusted files.
'''

# 32 bits size followed by the four-character code
HEADER_SIZE = 8

# version (8 bits) and flags (24 bits) of a full box
HEADER_EXT_SIZE = 4

# real files rarely nest more than a dozen levels
MAX_DEPTH = 32
