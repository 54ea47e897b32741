"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates the fixed SQL for one coverage entity.
Repositories send queries through the shared QueryExecutor and map the
positional rows it returns into domain model objects.
"""
