"""
CascadeBlog Backend - API Routes Package
=========================================

Route Inventory:
    - health.py:    GET  /                        (liveness message)
                    GET  /health                  (database health)
    - blogs.py:     GET  /blogs                   (list / search / filter)
                    GET  /latest-blogs            (6 newest)
                    GET  /single-blog/{blogId}    (one blog or null)
                    POST /add-blog                (auth)
                    PUT  /update-blog/{id}        (auth, upsert)
                    GET  /featured-blogs          (top 10 by word count)
    - comments.py:  POST /comments, GET /comments/{blogId}
    - wishlist.py:  POST /wishlist                (toggle)
                    GET  /wishlist/{userEmail}    (auth + ownership)

Routes stay thin: extract input, call a service, return its result.
"""
