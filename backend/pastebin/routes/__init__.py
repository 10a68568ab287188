# Routes package init
"""
Pastebin Backend — API Routes Package
=======================================

Route Inventory:
    - pastes.py:  POST   /api/pastes          (create)
                  GET    /api/pastes          (list recent)
                  GET    /api/pastes/{id}     (read, counts a view)
                  DELETE /api/pastes/{id}     (soft delete)
    - health.py:  GET    /health              (service health check)

Routes stay thin: they extract request data, call PasteService and let the
global exception handlers shape error responses.
"""
