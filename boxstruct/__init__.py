"""
# Boxstruct: MP4-family boxes for humans.

A box (also called "atom") is a length-prefixed, four-character-tagged
binary record; a container box is a box whose payload is itself a sequence
of boxes. Every file of the MP4 family (ISO base media, QuickTime, HEIF, ...)
is a tree of these records.

The library describes a format declaratively: a format is a Chunk whose class
attributes are Fields, each of which knows its own binary representation.

Two basic operations are defined for a chunk and its fields:

 1. unpack(): read the binary data at the current position of the stream
    and build a high-level representation of it.

 2. pack(): encode the high-level representation into binary data at the
    current position of the stream.

to these we add one more

 3. relayout(): recompute the offset of each sub-component starting from
    a given offset, returning the total size.

Boxes add a header in front of the chunk (see boxstruct.media.mp4):
reading a box means reading the header, then dispatching on its tag.
A chunk moves through the following phases

 1. INIT
 2. RELAYOUTING
 3. PACKING
 4. UNPACKING
 5. DONE
 6. ERROR

"""
