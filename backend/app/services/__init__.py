# Services package init
"""
Records API — Services Layer
=============================

What:  Business logic between routes (HTTP) and the filesystem.

Service Inventory:
    - RecordService:  record creation, atomic persistence, lookup by id
    - OpenAPIService: static API description, raw and converted to JSON

Both are built once per application by create_app() from its Settings and
handed to routes through FastAPI dependencies, so separate app instances
never share a storage root.
"""
