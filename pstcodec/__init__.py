"""
# pstcodec: savegames for humans

A savegame is a fixed layout binary record; pstcodec converts it into a line
oriented text file (a "pst" file) that can be edited by hand, and back.

Two main operations are defined:

 1. unpack(): walk the schema of the savegame over the binary stream,
    splitting recursively each region until a leaf is found, and emit
    one line for each leaf.

 2. pack(): read back the lines and encode each value with the kind and
    the width written on the line itself, in the order of the lines.

Since pack() doesn't need the schema, a pst file produced by an older schema
can always be packed again, as long as the schema is refined only by splitting
regions and never by changing the kind and the width of an existing line.
"""
