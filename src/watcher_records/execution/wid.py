"""Watch execution ids.

An execution id binds a watch to one firing:
`<watch_id>_<uuid>-<execution time>`. The watch id is everything before the
last underscore, so watch ids may themselves contain underscores.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from watcher_records.dates import format_date_time


class InvalidWidError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class Wid:
    value: str
    watch_id: str = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidWidError(f"invalid watch execution id [{self.value!r}]")
        index = self.value.rfind("_")
        if index <= 0:
            raise InvalidWidError(f"invalid watch execution id [{self.value}]")
        object.__setattr__(self, "watch_id", self.value[:index])

    @classmethod
    def generate(cls, watch_id: str, execution_time: datetime) -> Wid:
        if not watch_id:
            raise InvalidWidError("watch id is required to generate an execution id")
        return cls(f"{watch_id}_{uuid.uuid4()}-{format_date_time(execution_time)}")

    def __str__(self) -> str:
        return self.value
