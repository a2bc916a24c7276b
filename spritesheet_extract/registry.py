"""Cartridge format lookup by SourceKind.

Every module in spritesheet_extract/formats/ that defines a
`cartridge_format` (a CartridgeFormat) is imported on first use and filed
under the SourceKind it decodes. Two modules claiming the same kind is an
error.
"""

import importlib
import pkgutil

from spritesheet_extract.core.types import CartridgeFormat, SourceKind

_registry: dict[SourceKind, CartridgeFormat] = {}


def discover() -> dict[SourceKind, CartridgeFormat]:
    """Import all format modules and return the registry."""
    if _registry:
        return _registry

    import spritesheet_extract.formats as pkg

    for info in pkgutil.iter_modules(pkg.__path__):
        if info.name.startswith('_'):
            continue
        module = importlib.import_module(f'{pkg.__name__}.{info.name}')
        fmt = getattr(module, 'cartridge_format', None)
        if not isinstance(fmt, CartridgeFormat):
            continue
        if fmt.kind in _registry:
            other = _registry[fmt.kind].name
            raise RuntimeError(f'{fmt.kind.value} cartridges claimed by both {other} and {fmt.name}')
        _registry[fmt.kind] = fmt

    return _registry


def get(kind: SourceKind) -> CartridgeFormat:
    """The format that decodes a given source kind."""
    reg = discover()
    if kind not in reg:
        available = ', '.join(sorted(f.name for f in reg.values()))
        raise KeyError(f'No cartridge format for {kind.value}. Available: {available}')
    return reg[kind]


def all_formats() -> dict[SourceKind, CartridgeFormat]:
    return discover()
