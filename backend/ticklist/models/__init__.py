"""
Ticklist Backend — ORM Models
===============================

Importing this package registers every table with `Base.metadata`, which
Alembic autogenerate and the test suite's `create_all` both rely on.

Table names are the lower-cased entity names; column order is declaration
order, with the server-generated `id` first.
"""

from ticklist.models.crag import Crag
from ticklist.models.route import Route
from ticklist.models.ascent import Ascent

__all__ = ["Crag", "Route", "Ascent"]
