"""Call sync or async handlers uniformly.

Route handlers can be ``def`` or ``async def``. The sync/async check lives
here and nowhere else::

    result = await invoke(handler, request, params)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
