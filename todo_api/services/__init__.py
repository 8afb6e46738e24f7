# Services package init
"""
Todo API — Services Layer
===========================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services receive a session per call, apply the todo rules, and return
       response schemas. They raise application exceptions, never HTTP errors.

Service Inventory:
    - TodoService: list/create/update/delete over the `todos` table
"""
