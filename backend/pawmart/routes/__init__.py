# Routes package init
"""
PawMart Backend — API Routes Package
======================================

Route Inventory:
    - users.py:     /users, /users/{email}, /users/{id}
    - listings.py:  /listings, /listings/{id}, /listings/user/{email},
                    /listings/category/{category}
    - orders.py:    /orders, /orders/{id}, /orders/user/{email}
    - health.py:    GET /  (liveness), GET /health
    - common.py:    service result → HTTP response builders

Routes stay THIN: parse the request, call one service method, shape the
reply. Business rules live in services.
"""
