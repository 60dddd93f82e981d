"""State layer.

The store owns the single current image map; the poller is the only
writer that replaces it after startup.
"""
