"""
Product API — Services Layer
==============================

Service Inventory:
    - ProductService: create / get / update / delete over the product store,
      with storage failures classified into the API's error taxonomy.
"""
