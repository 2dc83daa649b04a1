from .connection import ConnectionContext, ConnectionState
from .connection_manager import ConnectionManager
from .server import SocketServer
from .upgrade import UpgradeController

__all__ = ["ConnectionContext", "ConnectionState", "ConnectionManager", "SocketServer", "UpgradeController"]
