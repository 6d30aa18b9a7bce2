"""
The MODEL layer contains pure data structures and the field generator.
It has NO knowledge of widgets; the only Qt it touches is the QImage codec
used for export.
"""
