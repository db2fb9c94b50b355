# Routes package init
"""
Hotel Listings API: API Routes Package
========================================

Route Inventory:
    - hotels.py:   POST /hotel                  (create)
                   GET  /hotel/{hotelId}        (read)
                   PUT  /hotel/{hotelId}        (replace)
    - images.py:   POST /images                 (multipart upload, attach to hotel)
    - uploads.py:  GET  /uploads/{path}         (serve uploaded image bytes)
    - health.py:   GET  /health                 (service health check)

Routes stay thin: extract data from the request, call a service, return the
result. Errors are raised and formatted by the handlers in main.py.
"""
