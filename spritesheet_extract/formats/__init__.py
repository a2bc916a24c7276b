"""Cartridge format modules, one per on-disk encoding.

Each module defines a `cartridge_format` and registers its reader with
`@cartridge_format.reader`; spritesheet_extract.registry finds them.
"""
