from typing import Dict, Optional
from karou.errors import ErrorVal, KarouError
from karou.types import Value


class Environment:
    """Represents a scope environment mapping identifiers to values."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Value] = {}

    def __contains__(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.parent is not None and name in self.parent

    def get(self, name: str) -> Value:
        if name in self.values:
            return self.values[name]
        if self.parent:
            return self.parent.get(name)
        raise KarouError(ErrorVal('NameError', f'Undefined variable: {name}'))

    def define(self, name: str, value: Value):
        # Always binds in this frame, shadowing any outer binding.
        self.values[name] = value

    def set(self, name: str, value: Value):
        """Rebind an existing name in the nearest frame that holds it.

        Part of the scope-chain API for embedders; Karou source itself only
        binds new names with `let`, which goes through `define`.
        """
        if name in self.values:
            self.values[name] = value
        elif self.parent:
            self.parent.set(name, value)
        else:
            raise KarouError(ErrorVal('NameError', f'Undefined variable: {name}'))
