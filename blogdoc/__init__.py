"""
Blog content composition model.

Ordered, typed content blocks (paragraph, image, video) for a single
article, plus the adapter that keeps the older flat ``body``/``media``
representation readable and writable.
"""
