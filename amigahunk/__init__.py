"""
# Amigahunk: a file format ORM for AmigaOS Hunk files.

A file format is described as a Chunk made of Fields, each subcomponent
representing a specific aspect of the binary data. The fields are declared
as class attributes and unpacked in the order of declaration

    class CodeBlock(Chunk):
        longs = LongWordField()
        code  = LongWordsField(Dependency('.longs'))

where a Dependency links a field to the value of another one already unpacked.

unpack() is the only operation: read the binary data from a Stream and
build a high-level representation of that. The stream is a cursor over an
immutable buffer that only moves forward, so the chunk knows from the
fields how many bytes need to be read to finalize the representation.

An instance can be in one of the following states

 1. INIT
 2. UNPACKING
 3. DONE

Every error during the unpacking is a HunkException telling the path of
fields that leads to the failure.
"""
