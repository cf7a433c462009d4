"""charrom - Edit, convert and share bitmap character ROMs.

charrom reads and writes the raw binary character sets used by 8-bit
computers, terminals and LCD modules. Characters are small boolean
pixel grids (1-16 pixels per side) packed row by row into bytes with a
configurable padding side and bit order.

Example:
    $ charrom show c64.bin --width 8 --height 8

This prints every character of the ROM as block art. Sets can be turned
into compact share tokens, imported from TTF/OTF fonts, or scraped out of
C and assembly listings.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
