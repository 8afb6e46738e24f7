# Routes package init
"""
Todo API — API Routes Package
===============================

Route Inventory:
    - todos.py:   GET    /api/todos          (list, newest first)
                  POST   /api/todos          (create)
                  PUT    /api/todos/{id}     (update title/completed)
                  DELETE /api/todos/{id}     (delete)
    - health.py:  GET    /health             (service health check)

Routes stay thin: extract request data, call the service, return the
result. Status codes for errors come from the global exception handlers.
"""
