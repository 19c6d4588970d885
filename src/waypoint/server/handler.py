"""ASGI handler — translates ASGI scope/messages to waypoint types.

The only component that touches raw ASGI HTTP messages. Converts the scope
to a Request, hands it to the Dispatcher, and sends the Response back.
The response is sent only after the handler has fully produced it.
"""

from waypoint._internal.types import Receive, Scope, Send
from waypoint.http.request import Request
from waypoint.server.dispatcher import Dispatcher
from waypoint.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
) -> None:
    """Process a single HTTP request through the dispatcher."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = await dispatcher.dispatch(request)
    await send_response(response, send)
