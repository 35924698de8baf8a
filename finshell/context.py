from typing import Dict, Iterator, Optional, Tuple

from .position import Position
from .types import Integer, Number

# Bindings every program context starts with.
PREDEFINED: Dict[str, Number] = {
    'zero': Integer(0),
}


class SymbolMap:
    """Flat name -> Number bindings owned by a single context."""

    def __init__(self):
        self.symbols: Dict[str, Number] = {}

    def get(self, name: str) -> Optional[Number]:
        return self.symbols.get(name)

    def set(self, name: str, value: Number):
        self.symbols[name] = value

    def remove(self, name: str) -> Optional[Number]:
        return self.symbols.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)

    def __repr__(self) -> str:
        return f'SymbolMap({self.symbols!r})'


class Context:
    """One evaluation frame.

    `parent` and `parent_pos` are fixed at construction: a frame either is
    the root (neither set) or was entered from `parent` at `parent_pos`.
    """

    def __init__(self, display_name: str, parent: Optional['Context'] = None,
                 parent_pos: Optional[Position] = None, symbol_map: Optional[SymbolMap] = None):
        if (parent is None) != (parent_pos is None):
            raise ValueError('a context needs both a parent and an entry position, or neither')
        self.display_name = display_name
        self._parent = parent
        self._parent_pos = parent_pos
        self.symbol_map = symbol_map

    @property
    def parent(self) -> Optional['Context']:
        return self._parent

    @property
    def parent_pos(self) -> Optional[Position]:
        return self._parent_pos

    @classmethod
    def root(cls, display_name: str = '<program>') -> 'Context':
        """A program-level frame whose symbol map holds the predefined names."""
        symbol_map = SymbolMap()
        for name, value in PREDEFINED.items():
            symbol_map.set(name, value.copy())
        return cls(display_name, symbol_map=symbol_map)

    def child(self, display_name: str, entry_pos: Position, symbol_map: Optional[SymbolMap] = None) -> 'Context':
        return Context(display_name, self, entry_pos, symbol_map)

    def chain(self) -> Iterator['Context']:
        ctx: Optional[Context] = self
        while ctx is not None:
            yield ctx
            ctx = ctx.parent

    def lookup(self, name: str) -> Tuple[bool, Optional[Number]]:
        """Resolve `name` through this frame and its ancestors.

        Returns `(has_symbols, value)`: `has_symbols` is False when no frame
        in the chain owns a symbol map at all.
        """
        has_symbols = False
        for ctx in self.chain():
            if ctx.symbol_map is None:
                continue
            has_symbols = True
            value = ctx.symbol_map.get(name)
            if value is not None:
                return has_symbols, value
        return has_symbols, None

    def __repr__(self) -> str:
        return f'Context({self.display_name!r})'
