"""
Dump state that templates are resolved against.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .models import RoutineInfo, TableInfo, TriggerInfo
from .templates import Lookup, resolve_path


@dataclass
class DumpContext:
    """Per-dump state: session values plus the object currently being dumped.

    Placeholders address it as ``%(database)``, ``%(character_set_client)``
    or ``%(table.table_name)``; the table, routine and trigger sub-trees are
    absent unless an object of that kind is current.
    """
    database: str
    session: dict[str, str] = field(default_factory=dict)
    table: Optional[TableInfo] = None
    routine: Optional[RoutineInfo] = None
    trigger: Optional[TriggerInfo] = None

    def namespace(self, **params: Any) -> dict[str, Any]:
        values: dict[str, Any] = {**self.session, 'database': self.database}
        for name in ('table', 'routine', 'trigger'):
            current = getattr(self, name)
            if current is not None:
                values[name] = current.template_values()
        values.update(params)
        return values

    def lookup(self, path: str, **params: Any) -> Optional[str]:
        return resolve_path(self.namespace(**params), path)

    def scope(self, **params: Any) -> Lookup:
        """Return a lookup function with extra per-call values."""
        namespace = self.namespace(**params)
        return lambda path: resolve_path(namespace, path)

    def reset(self) -> None:
        self.table = None
        self.routine = None
        self.trigger = None
