# Routes package init
"""
Book API - Routes Package
=========================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - root.py:    GET  /                     (welcome message)
    - books.py:   GET/POST /books            (list, create)
                  GET/PUT/DELETE /books/{id} (get, update, delete)
    - health.py:  GET  /health               (service health check)

Routes stay thin: they bind input, call the BookStore and pick the status
code. Error bodies are produced by the exception handlers in main.py.
"""
