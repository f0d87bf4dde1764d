"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories read through the schema's views and stored functions and
return domain model objects. Rows are written by the ingestion side, not here.
"""
