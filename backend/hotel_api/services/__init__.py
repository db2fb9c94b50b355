# Services package init
"""
Hotel Listings API: Services Layer
====================================

What:  Business logic between routes (HTTP) and the record store (persistence).

Service Inventory:
    - validator:      presence → type → room shape checks on raw JSON bodies
    - HotelService:   create / get_by_id / update against the record store
    - FileService:    writes uploaded bytes and builds their public URLs
    - ImageService:   stores uploads and appends their URLs to a hotel

Services never look at requests or status codes; they return models or raise
exceptions from hotel_api.exceptions.
"""
