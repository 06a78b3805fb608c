# Services package init
"""
Book API - Services Layer
=========================

What:  Business logic sitting between routes (HTTP) and the stored records.
How:   Services accept plain values, apply the collection rules and return
       Book records. They raise application exceptions, never HTTP errors.

Service Inventory:
    - BookStore: Lock-guarded in-memory list with list/get/create/update/delete
"""
