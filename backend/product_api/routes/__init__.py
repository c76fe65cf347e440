"""
Product API — Routes Package
==============================

Route Inventory:
    - products.py:  POST   /products
                    GET    /products/{id}
                    PUT    /products/{id}
                    DELETE /products/{id}
    - health.py:    GET    /health

Routes stay thin: they take the validated request, call ProductService, and
return the response model. Error responses come from the exception handlers
registered in main.py.
"""
