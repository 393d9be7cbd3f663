# Services package init
"""
Inventory Service — Services Layer
====================================

What:  State and storage behind the HTTP routes.

Service Inventory:
    - InventoryStore: in-memory item collection and id generator
    - PhotoStorage:   photo files in the cache directory

The routes compose the two; neither service knows about the other.
"""
