from .dispatch import HANDLERS
from .manager import handle_websocket_connection
from .parser import parse_client_message

__all__ = ["HANDLERS", "handle_websocket_connection", "parse_client_message"]
