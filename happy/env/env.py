from __future__ import annotations
from pydantic import BaseModel, StrictInt, StrictStr
from typing import Callable, Dict, Literal, Union

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    HAPPY_QUERIES: StrictInt = 3
    HAPPY_TIMEOUT: StrictInt = 2000
    HAPPY_DELAY: StrictInt = 25
    HAPPY_DEFAULT_PORT: StrictStr = "80"
    HAPPY_LOG_LEVEL: StrictStr = "info"
    HAPPY_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    HAPPY_LOG_FILE: StrictStr | None = None

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "HAPPY_QUERIES": int,
            "HAPPY_TIMEOUT": int,
            "HAPPY_DELAY": int,
            "HAPPY_DEFAULT_PORT": str,
            "HAPPY_LOG_LEVEL": str,
            "HAPPY_LOG_OUTPUT": str,
            "HAPPY_LOG_FILE": str,
        }
