from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import get_mongo_connection

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the database connection manager in the container.
        The manager connects lazily; nothing touches the network here.
        """
        container.register_singleton("mongo_connection", get_mongo_connection())
