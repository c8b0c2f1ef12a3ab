"""
Architecture feature - API route modules.

- context map (full map, aggregated relationship edges)
- bounded contexts (list, per-context analysis, dependencies)
"""
