"""
CascadeBlog Backend - Services Layer
=====================================

Service Inventory:
    - queries:           pure builders for filters, sorts, updates, ranking
    - serializers:       BSON documents and write results → JSON-ready data
    - BlogService:       blogs collection
    - CommentService:    comments collection
    - WishlistService:   wishlists collection (toggle + listing)
    - IdentityVerifier:  bearer ID token verification (Google / Firebase)

Services take the database handle per call and translate driver errors
into DatabaseError; routes never see pymongo exceptions.
"""
