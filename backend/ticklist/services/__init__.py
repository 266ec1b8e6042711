# Services package init
"""
Ticklist Backend — Services Package
=====================================

What:  Database access behind the HTTP layer.

Service Inventory:
    - resource_service.py: TableResource (generic list/create) and its three
                           instances: crag_resource, route_resource, ascent_resource

Design Principle:
    Services know nothing about HTTP. They take an AsyncSession, return plain
    values or Pydantic models, and raise DatabaseError on failure.
"""
