"""
Games module - Catalogs the session can be seeded with.

Each catalog has its own subpackage with:
- Seed job definitions
- Builders that turn definitions into a JobCatalog
"""
