"""
API package containing the HTTP routes.

``router`` in ``router.py`` includes every domain router under its
path prefix.
"""
