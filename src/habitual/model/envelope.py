# SPDX-License-Identifier: MIT

from typing import Any, Literal, Optional, TypedDict, Union, TypeAlias


class ApiOk(TypedDict):
    ok: Literal[True]
    data: Any


class ApiFail(TypedDict):
    ok: Literal[False]
    error: str  # Human readable message
    code: Optional[str]
    status: int  # 4xx client error, 5xx server error


Envelope: TypeAlias = Union[ApiOk, ApiFail]
