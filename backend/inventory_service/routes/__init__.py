# Routes package init
"""
Inventory Service — API Routes Package
========================================

Route Inventory:
    - inventory.py:  GET/PUT/DELETE /inventory[/{id}], GET/PUT /inventory/{id}/photo
    - register.py:   POST /register          (create item, optional photo)
    - search.py:     GET  /search            (HTML lookup by id)
    - forms.py:      GET  /RegisterForm.html, /SearchForm.html
    - health.py:     GET  /health

Routes stay thin: parse the request, call the store and photo storage,
shape the response. Errors are raised and turned into responses by the
handlers registered in main.py (the search page answers in plain text and
handles its own errors).
"""
